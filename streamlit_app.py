"""
Don't Ban Hemp - Action Center
Find your federal lawmakers by zip code and email them before the ban takes effect
"""

from __future__ import annotations
import re
from datetime import datetime

import streamlit as st
from streamlit.errors import StreamlitAPIException

from hempaction import (
    CAMPAIGN_GOAL,
    HempActionError,
    Lawmaker,
    LookupTracker,
    ROLE_LABELS,
    Services,
    StatsAggregator,
    build_services,
    configure_logging,
    get_email_template,
    load_settings,
    validate_signup,
)
from hempaction.config import COUNTDOWN_REFRESH_SECONDS, STATS_REFRESH_SECONDS
from hempaction.countdown import format_countdown, time_remaining, urgency
from hempaction.display import URGENCY_COLORS, contact_table, lawmaker_subtitle, stance_badge
from hempaction.errors import ConfigurationError


st.set_page_config(
    page_title="Don't Ban Hemp | Action Center",
    page_icon="🌿",
    layout="centered"
)


def _secrets():
    """Contents of secrets.toml, or None when there is no secrets file."""
    try:
        return st.secrets.to_dict()
    except (FileNotFoundError, StreamlitAPIException):
        return None


@st.cache_resource
def get_services() -> Services:
    """One set of clients per server process."""
    settings = load_settings(secrets=_secrets())
    configure_logging(settings.log_level)
    return build_services(settings)


try:
    services = get_services()
except ConfigurationError as e:
    st.error(f"⚠️ {e}")
    st.markdown("""
    Set these in the environment, a `.env` file or `.streamlit/secrets.toml`:
    `SUPABASE_URL`, `SUPABASE_SERVICE_ROLE_KEY`, `GOOGLE_CIVIC_API_KEY`, `RESEND_API_KEY`
    """)
    st.stop()


# Session defaults
if "lookup" not in st.session_state:
    st.session_state.lookup = LookupTracker()
if "user" not in st.session_state:
    st.session_state.user = None
if "stats" not in st.session_state:
    st.session_state.stats = StatsAggregator(services.supabase)
if "sent_to" not in st.session_state:
    st.session_state.sent_to = set()


# =============================================================================
# COUNTDOWN & STATS
# =============================================================================

@st.fragment(run_every=COUNTDOWN_REFRESH_SECONDS)
def countdown_panel(target: datetime):
    remaining = time_remaining(target)
    if remaining.expired:
        st.markdown("## :red[The hemp ban is now in effect.]")
        return

    color = URGENCY_COLORS[urgency(remaining.days)]
    st.markdown("##### THE HEMP BAN TAKES EFFECT IN:")
    st.markdown(f"# :{color}[{format_countdown(remaining)}]")
    st.caption("DAYS : HRS : MIN : SEC")


@st.fragment(run_every=STATS_REFRESH_SECONDS)
def stats_panel(aggregator: StatsAggregator):
    stats = aggregator.refresh()

    if not aggregator.has_data:
        st.error(aggregator.error or "Loading campaign stats...")
        return
    if aggregator.error:
        # Keep showing the last good numbers
        st.caption(f"⚠️ {aggregator.error}")

    st.subheader("Campaign Momentum")
    col1, col2 = st.columns(2)
    with col1:
        st.metric("Supporters", f"{stats.total_users:,}")
    with col2:
        st.metric("Emails Sent", f"{stats.total_emails:,}")

    percent = stats.progress_percent(CAMPAIGN_GOAL)
    st.progress(percent / 100, text=f"{stats.total_actions:,} / {CAMPAIGN_GOAL:,} actions")
    st.caption(f"{percent:.1f}% to {CAMPAIGN_GOAL:,} actions")


# =============================================================================
# EMAIL DIALOG
# =============================================================================

@st.dialog("Send Your Email", width="large")
def email_dialog(lawmaker: Lawmaker):
    user = st.session_state.user
    body_key = f"email_body_{lawmaker.id}"

    try:
        template = get_email_template(
            user.role, lawmaker, user.name, services.settings.ban_effective_date
        )
    except HempActionError as e:
        st.error(str(e))
        return

    st.markdown(f"**Send Email to {lawmaker.name}**")
    st.caption("Review and personalize your message before sending")

    st.text_input("Subject", value=template.subject, disabled=True)
    body = st.text_area(
        "Message",
        value=template.body,
        height=380,
        key=body_key,
        help="You can personalize this message if you'd like",
    )

    col1, col2 = st.columns(2)
    with col1:
        if st.button("Cancel", use_container_width=True):
            st.session_state.pop(body_key, None)
            st.rerun()
    with col2:
        if st.button("Send Email", type="primary", use_container_width=True):
            try:
                with st.spinner("Sending..."):
                    services.dispatcher.send_email(user.id, lawmaker.id, template.subject, body)
            except HempActionError as e:
                st.error(str(e))
            else:
                st.session_state.sent_to.add(lawmaker.id)
                st.session_state.pop(body_key, None)
                st.rerun()


def lawmaker_card(lawmaker: Lawmaker):
    with st.container(border=True):
        col1, col2 = st.columns([1, 3])
        with col1:
            if lawmaker.photo_url:
                st.image(lawmaker.photo_url, width=100)
            else:
                st.markdown("### 🏛️")
        with col2:
            st.markdown(f"**{lawmaker.name}**")
            st.caption(lawmaker_subtitle(lawmaker))
            st.markdown(stance_badge(lawmaker))
            if lawmaker.key_quote:
                st.markdown(f"> {lawmaker.key_quote}")
            if lawmaker.phone:
                st.markdown(f"📞 [{lawmaker.phone}](tel:{lawmaker.phone})")
            if lawmaker.contact_form_url:
                st.markdown(f"🔗 [Contact form]({lawmaker.contact_form_url})")

            if lawmaker.id in st.session_state.sent_to:
                st.success("✅ Email sent")
            elif not lawmaker.email:
                st.caption("No email on file. Use the phone number or contact form above.")
            elif st.button("✉️ Send Email", key=f"send_{lawmaker.id}", type="primary"):
                email_dialog(lawmaker)


# =============================================================================
# PAGE
# =============================================================================

st.title("🌿 Don't Ban Hemp")
st.markdown(
    "Congress is about to ban hemp products nationwide. "
    "Tell your senators and representative to stop it."
)

st.divider()
countdown_panel(services.settings.ban_effective_date)
st.divider()
stats_panel(st.session_state.stats)
st.divider()

st.header("Find Your Representatives")
st.caption("Enter your information to see who represents you and send them a message")

tracker: LookupTracker = st.session_state.lookup

with st.form("action_form"):
    email = st.text_input("Email", placeholder="your.email@example.com")
    zip_input = st.text_input("Zip Code", placeholder="12345", max_chars=5)
    role = st.selectbox(
        "I am a...",
        options=list(ROLE_LABELS),
        format_func=ROLE_LABELS.get,
        index=None,
        placeholder="Select your role",
    )
    submitted = st.form_submit_button(
        "Find My Representatives", type="primary", use_container_width=True
    )

if submitted:
    email = email.strip()
    zip_code = re.sub(r"[^0-9]", "", zip_input)
    errors = validate_signup(email, zip_code, role)

    if errors:
        for message in errors.values():
            st.error(message)
    else:
        token = tracker.begin()
        try:
            with st.spinner("Looking up your representatives..."):
                st.session_state.user = services.users.create_user(email, zip_code, role)
                result = services.resolver.lookup(zip_code)
        except HempActionError as e:
            tracker.fail(token, str(e))
        else:
            tracker.apply(token, result)

if tracker.error:
    st.error(tracker.error)

if tracker.result is not None:
    result = tracker.result

    if result.is_empty():
        st.warning("No lawmakers found for this zip code. Please double-check it and try again.")
    else:
        if result.senators:
            st.subheader("Your Senators")
            for senator in result.senators:
                lawmaker_card(senator)

        st.subheader("Your Representative")
        if result.representative:
            lawmaker_card(result.representative)
        else:
            st.info("We couldn't determine your representative from this zip code.")

        with st.expander("📇 All contact details", expanded=False):
            st.dataframe(contact_table(result.all()), use_container_width=True, hide_index=True)

    if st.button("Start over"):
        tracker.close()
        st.session_state.lookup = LookupTracker()
        st.session_state.sent_to = set()
        st.rerun()
