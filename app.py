import streamlit as st
import pandas as pd
import altair as alt

from config import configure_logging, get_settings
from context import AppContext
from database import AuthenticationError, RecordFetchError
from toast import take_unseen
from logic import (
    format_plants_count,
    format_species_count,
    get_container_plants,
    get_container_species,
)

# --- KONFIGURATION & KONTEXT ---
st.set_page_config(page_title="Garden Diary", layout="wide")
configure_logging(get_settings().LOG_LEVEL)

if "ctx" not in st.session_state:
    st.session_state.ctx = AppContext()
    st.session_state.shown_toasts = set()
ctx: AppContext = st.session_state.ctx

TOAST_ICONS = {"info": "ℹ️", "success": "✅", "warning": "⚠️", "error": "❌"}


# --- TOASTS ---
def render_toasts():
    ctx.notifications.toaster.expire()
    for t in take_unseen(ctx.notifications.toasts, st.session_state.shown_toasts):
        body = f"**{t.data.title}**\n\n{t.data.description}" if t.data.title else t.data.description
        st.toast(body, icon=TOAST_ICONS[t.data.type])

    # Noch offene Meldungen zum Wegklicken
    pending = [t for t in ctx.notifications.toasts if t.data.dismissible]
    if pending:
        st.sidebar.subheader("Notifications")
        for t in pending:
            c1, c2 = st.sidebar.columns([5, 1])
            c1.caption(f"{TOAST_ICONS[t.data.type]} {t.data.description}")
            if c2.button("✕", key=f"dismiss_{t.id}"):
                ctx.notifications.remove_toast(t.id)
                st.rerun()


# --- SIDEBAR: LOGIN ---
user = ctx.auth.get_current_user()
with st.sidebar:
    st.header("Account")
    if user is None:
        with st.form("login_form"):
            identity = st.text_input("Email or username")
            password = st.text_input("Password", type="password")
            if st.form_submit_button("Sign in", type="primary"):
                try:
                    ctx.records.login(identity, password)
                except AuthenticationError as e:
                    ctx.notifications.error(e.message, title="Sign in failed")
                else:
                    signed_in = ctx.auth.get_current_user()
                    ctx.notifications.success(f"Welcome back, {signed_in.display_name}!")
                st.rerun()
    else:
        st.write(f"Signed in as **{user.display_name}**")
        if st.button("Sign out"):
            ctx.records.logout()
            ctx.notifications.toast("You have been signed out.")
            st.rerun()

# --- CONTAINER ---
st.title("🌱 Garden Diary")

if user is None:
    st.info("Sign in to see your containers.")
else:
    try:
        containers = ctx.records.list_containers()
    except RecordFetchError as e:
        ctx.notifications.error(e.message)
        containers = []

    if not containers:
        st.warning("No containers yet.")
    else:
        overview = pd.DataFrame([
            {
                "Container": c.name,
                "Location": c.location,
                "Size": c.size,
                "Last watered": c.last_watered or "never",
                "Plants": format_plants_count(c),
                "Species": format_species_count(c),
            }
            for c in containers
        ])
        st.dataframe(overview, hide_index=True, use_container_width=True)

        for c in containers:
            with st.expander(f"{c.name} ({format_plants_count(c)})"):
                plants = get_container_plants(c)
                if not plants:
                    st.caption("No plants in this container.")
                    continue

                col1, col2 = st.columns(2)
                with col1:
                    st.table(pd.DataFrame([p.model_dump() for p in plants]))
                with col2:
                    species_df = pd.DataFrame([s.model_dump() for s in get_container_species(c)])
                    chart = alt.Chart(species_df).mark_bar(color="#2ca02c").encode(
                        x=alt.X("species:N", title="Species", sort=None),
                        y=alt.Y("count:Q", title="Entries"),
                        tooltip=["species", "count"],
                    ).properties(height=240)
                    st.altair_chart(chart, use_container_width=True)

render_toasts()
