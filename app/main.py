import sys
import os
import streamlit as st

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from catalog.config import Config, setup_logging
from catalog.filters import in_categories
from catalog.loader import load_seed
from catalog.service import CatalogService
from Catalog_Service.surfaces import (
    count_surface,
    edit_validation_surface,
    listing_surface,
    picker_surface,
)


# ============ Данные ============
@st.cache_resource
def init_logging():
    setup_logging()
    return True


def get_data():
    # без кэша: дерево и счётчики пересчитываются на каждый показ страницы
    return load_seed(Config.SEED_PATH)


init_logging()
st.set_page_config(page_title="Catalog", page_icon="🗂️", layout="wide")

categories, associations = get_data()
service = CatalogService(categories, associations)
by_id = {c.id: c for c in categories}


def indent(title: str, depth: int) -> str:
    return f"{'— ' * depth}{title}"


# ============ SIDEBAR ============
with st.sidebar:
    st.header("📂 Навигация")
    page = st.radio(
        "Раздел:",
        ["🏪 Каталог", "🌳 Категории (админ)", "✏️ Смена родителя"],
        label_visibility="collapsed",
    )


# ============ PAGE: КАТАЛОГ ============
if page == "🏪 Каталог":
    st.header("🏪 Каталог товаров")

    totals = count_surface(categories, associations)
    params = dict(st.query_params)

    with st.sidebar:
        st.subheader("Категории")
        for node in service.tree():
            label = f"{node.title} ({totals.get(node.id, 0)})"
            if st.button(label, key=f"nav_{node.id}"):
                st.query_params.clear()
                st.query_params["category"] = node.id
                st.rerun()
        if st.button("Все категории", key="nav_all"):
            st.query_params.clear()
            st.rerun()

    picked = st.multiselect(
        "Фильтр по категориям",
        [o["id"] for o in picker_surface(categories)],
        format_func=lambda cid: by_id[cid].title,
    )
    if picked:
        params = {"categories": ",".join(picked)}

    listing = listing_surface(params, categories)

    if listing["selected_parent"] and listing["subcategories"]:
        parent = by_id.get(listing["selected_parent"])
        st.caption(f"Подкатегории: {parent.title if parent else ''}")
        cols = st.columns(len(listing["subcategories"]))
        for col, sub in zip(cols, listing["subcategories"]):
            with col:
                if st.button(sub["title"], key=f"sub_{sub['id']}"):
                    st.query_params["subcategory"] = sub["id"]
                    st.rerun()

    shown = list(filter(in_categories(frozenset(listing["category_ids"])), associations))
    st.info(f"🔍 Найдено товаров: **{len(shown)}**")
    for row in shown[:50]:
        cat = by_id.get(row.category_id)
        st.write(f"**{row.product_id}** — {cat.title if cat else 'Без категории'}")


# ============ PAGE: АДМИНКА КАТЕГОРИЙ ============
elif page == "🌳 Категории (админ)":
    st.header("🌳 Категории")

    summary = service.summary()
    st.caption(f"{summary['roots']} main categories • {summary['total']} total")

    query = st.text_input("Поиск", "")
    totals = service.total_counts()

    def render(nodes):
        stack = [(node, 0) for node in reversed(nodes)]
        while stack:
            node, depth = stack.pop()
            st.markdown(
                f"{'&nbsp;' * 6 * depth}**{node.title}** "
                f"<span style='color:gray'>({totals.get(node.id, 0)})</span>",
                unsafe_allow_html=True,
            )
            stack.extend((child, depth + 1) for child in reversed(node.children))

    found = service.search(query)
    if not found:
        st.warning("Ничего не найдено")
    render(found)


# ============ PAGE: СМЕНА РОДИТЕЛЯ ============
elif page == "✏️ Смена родителя":
    st.header("✏️ Редактирование категории")

    options = picker_surface(categories)
    category_id = st.selectbox(
        "Категория",
        [o["id"] for o in options],
        format_func=lambda cid: by_id[cid].title,
    )

    # список для выбора родителя без самой категории и её потомков
    parent_options = [{"id": Config.NO_PARENT_SENTINEL, "title": "Без родителя", "depth": 0}]
    parent_options += picker_surface(categories, exclude_id=category_id)
    labels = {o["id"]: indent(o["title"], o["depth"]) for o in parent_options}
    parent_field = st.selectbox("Родитель", list(labels), format_func=labels.get)

    if st.button("💾 Сохранить"):
        # проверка по полному свежему списку, а не по списку пикера
        fresh_categories, _ = get_data()
        result = edit_validation_surface(category_id, parent_field, fresh_categories)
        if result["ok"]:
            st.success("Родитель может быть изменён")
        else:
            st.error(result["message"])
