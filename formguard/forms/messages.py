"""
Fixed user-facing message set (French) shown next to fields and in alerts.
"""


class FormMessages:
    """
    Every string the pipeline hands to the page for display.
    """

    FIELD_VALID = "Valide"
    FIELD_INVALID = "{field} invalide ou requis"

    EMAIL_VALID = "Adresse email valide"
    EMAIL_INVALID = "Veuillez entrer une adresse email valide"
    EMAIL_FORMAT_HINT = "Format email incorrect (exemple: nom@domaine.com)"

    RATE_LIMITED = "Trop de tentatives. Veuillez attendre {minutes} minutes avant de réessayer."

    DEMO_NOTE = "Note: Ceci est un formulaire de démonstration sécurisé."

    # Busy label of the submit button and confirmation text, per form
    BUSY_LABELS = {
        "contact": "Envoi en cours...",
        "quote": "Traitement...",
    }
    CONFIRMATIONS = {
        "contact": "Merci pour votre message ! Nous vous contacterons bientôt.",
        "quote": "Votre demande de devis a été reçue ! Nous vous contacterons dans les 24h.",
    }
    DEFAULT_BUSY_LABEL = "Envoi en cours..."
    DEFAULT_CONFIRMATION = "Merci ! Votre demande a bien été envoyée."

    @classmethod
    def field_invalid(cls, field_name: str) -> str:
        return cls.FIELD_INVALID.format(field=field_name)

    @classmethod
    def rate_limited(cls, window_ms: int) -> str:
        minutes = max(1, round(window_ms / 60_000))
        return cls.RATE_LIMITED.format(minutes=minutes)

    @classmethod
    def busy_label(cls, form_id: str) -> str:
        return cls.BUSY_LABELS.get(form_id, cls.DEFAULT_BUSY_LABEL)

    @classmethod
    def confirmation(cls, form_id: str) -> str:
        text = cls.CONFIRMATIONS.get(form_id, cls.DEFAULT_CONFIRMATION)
        return f"{text}\n\n{cls.DEMO_NOTE}"
