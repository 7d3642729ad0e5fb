import streamlit as st
from dotenv import load_dotenv

load_dotenv()

from config.security_config import get_security_config
from formguard.errors import PatternMismatch, RateLimitExceeded
from formguard.forms import (
    EmailFeedback,
    FormMessages,
    SimulatedSubmitter,
    SubmitButtonState,
    current_year,
    format_display_date,
)
from formguard.gate import SubmissionGate
from formguard.input.rate_limiter import RateLimiter
from formguard.logging.security_logger import SecurityLogger

config = get_security_config()

# One gate per browser session; a page reload starts with fresh attempt logs
if "gate" not in st.session_state:
    logger = SecurityLogger(config.logging)
    st.session_state.gate = SubmissionGate(
        rate_limiter=RateLimiter(config.rate_limit, logger=logger),
        config=config,
        logger=logger,
    )
    st.session_state.submitter = SimulatedSubmitter(config.submission, logger=logger)
    st.session_state.email_feedback = EmailFeedback(st.session_state.gate.validator)

gate: SubmissionGate = st.session_state.gate
submitter: SimulatedSubmitter = st.session_state.submitter


def client_signature() -> str:
    try:
        return st.context.headers.get("User-Agent") or "unknown"
    except AttributeError:
        return "unknown"


def render_field_message(verdict, name):
    result = verdict.field_results.get(name)
    if result is None or result.message is None:
        return
    if result.is_valid:
        st.success(result.message, icon="✅")
    else:
        st.error(result.message, icon="⚠️")


def run_submission(form_id, fields, submit_label):
    verdict = gate.evaluate({
        "form_id": form_id,
        "client_signature": client_signature(),
        "fields": fields,
    })

    try:
        verdict.raise_for_status()
    except RateLimitExceeded as e:
        st.error(str(e))
        return verdict
    except PatternMismatch:
        return verdict

    confirmations = []
    button = SubmitButtonState(label=submit_label)
    with st.spinner(FormMessages.busy_label(form_id)):
        timer = submitter.submit(form_id, verdict, button, confirmations.append)
        if timer is not None:
            timer.join()
    for text in confirmations:
        st.success(text)
    return verdict


st.title("Contactez-nous")
st.caption(format_display_date())

contact_tab, quote_tab = st.tabs(["Contact", "Devis"])

with contact_tab:
    email_value = st.text_input("Email", key="contact_email", placeholder="nom@domaine.com")
    feedback = st.session_state.email_feedback.on_input(email_value)
    if feedback is not None:
        (st.success if feedback.is_valid else st.warning)(feedback.message)

    with st.form("contact-form", clear_on_submit=True):
        name = st.text_input("Nom", placeholder="Votre nom")
        phone = st.text_input("Téléphone (optionnel)")
        message = st.text_area("Message")
        submitted = st.form_submit_button("Envoyer")

    if submitted:
        verdict = run_submission("contact", [
            {"name": "name", "value": name, "kind": "text", "placeholder": "Votre nom", "required": True},
            {"name": "email", "value": email_value, "kind": "email", "required": True},
            {"name": "phone", "value": phone, "kind": "tel"},
            {"name": "message", "value": message, "kind": "textarea", "required": True},
        ], "Envoyer")
        for field_name in ("name", "email", "phone", "message"):
            render_field_message(verdict, field_name)

with quote_tab:
    with st.form("quote-form", clear_on_submit=True):
        company = st.text_input("Entreprise", placeholder="Nom de l'entreprise")
        quote_email = st.text_input("Email professionnel")
        details = st.text_area("Détails du projet")
        submitted = st.form_submit_button("Demander un devis")

    if submitted:
        verdict = run_submission("quote", [
            {"name": "company", "value": company, "placeholder": "Nom de l'entreprise", "field_type": "text", "required": True},
            {"name": "email", "value": quote_email, "kind": "email", "required": True},
            {"name": "details", "value": details, "kind": "textarea", "field_type": "text", "required": True},
        ], "Demander un devis")
        for field_name in ("company", "email", "details"):
            render_field_message(verdict, field_name)

st.divider()
st.caption(f"© {current_year()}")
