"""User-facing answer texts, per locale."""

from typing import Any

CATALOG: dict[str, dict[str, str]] = {
    "de": {
        "default": "Das kann ich irgendwie nicht.",
        "unknown_operation": "Das habe ich leider nicht verstanden.",
        "no_user": "Ich weiß leider nicht, wer du bist.",
        "detail_not_found": "Ich weiß leider nichts über {detail}.",
        "all_details_header": "Das weiß ich über dich:",
        "all_details_empty": "Ich habe noch nichts über dich gespeichert.",
        "label_nickname": "Spitzname",
        "label_first_name": "Vorname",
        "label_last_name": "Nachname",
        "detail_value": "{detail}: {value}",
        "bulk_set": "Ich kann nicht alle Details auf einmal setzen.",
        "value_missing": "Ich habe leider nicht verstanden, was ich als {detail} speichern soll.",
        "detail_saved": "Alles klar, ich habe mir das gemerkt.",
        "all_removed": "Ich habe alle deine Details gelöscht.",
        "detail_removed": "Ich habe {detail} gelöscht.",
        "code_issued": "Dein Code lautet {code}. Er ist {minutes} Minuten gültig.",
        "code_failed": "Ich konnte leider keinen Code erzeugen.",
        "code_missing": "Bitte nenne mir deinen Code.",
        "code_wrong": "Der Code ist leider falsch.",
        "code_timeout": "Der Code ist leider abgelaufen. Bitte fordere einen neuen an.",
        "self_link": "Dieser Code gehört zu deinem eigenen Konto.",
        "no_identity": "Ich konnte keinen Messenger finden, den ich verknüpfen kann.",
        "accounts_linked": "Deine Konten wurden erfolgreich verknüpft.",
        "link_failed": "Deine Konten konnten leider nicht verknüpft werden.",
        "messenger_missing": "Von welchem Messenger soll ich dein Konto trennen?",
        "messenger_removed": "Ich habe {messenger} von deinem Konto getrennt.",
        "messenger_remove_failed": "Ich konnte {messenger} leider nicht von deinem Konto trennen.",
    },
    "en": {
        "default": "I can't do that.",
        "unknown_operation": "Sorry, I didn't understand that.",
        "no_user": "Sorry, I don't know who you are.",
        "detail_not_found": "Sorry, I don't know anything about {detail}.",
        "all_details_header": "This is what I know about you:",
        "all_details_empty": "I haven't stored anything about you yet.",
        "label_nickname": "Nickname",
        "label_first_name": "First name",
        "label_last_name": "Last name",
        "detail_value": "{detail}: {value}",
        "bulk_set": "I can't set all details at once.",
        "value_missing": "Sorry, I didn't understand what to store as {detail}.",
        "detail_saved": "Alright, I'll remember that.",
        "all_removed": "I deleted all of your details.",
        "detail_removed": "I deleted {detail}.",
        "code_issued": "Your code is {code}. It is valid for {minutes} minutes.",
        "code_failed": "Sorry, I couldn't create a code.",
        "code_missing": "Please tell me your code.",
        "code_wrong": "Sorry, that code is wrong.",
        "code_timeout": "Sorry, that code has expired. Please request a new one.",
        "self_link": "This code belongs to your own account.",
        "no_identity": "I couldn't find a messenger to link.",
        "accounts_linked": "Your accounts have been linked.",
        "link_failed": "Sorry, your accounts could not be linked.",
        "messenger_missing": "Which messenger should I unlink from your account?",
        "messenger_removed": "I unlinked {messenger} from your account.",
        "messenger_remove_failed": "Sorry, I couldn't unlink {messenger} from your account.",
    },
}

DEFAULT_LOCALE = "de"


class Texts:
    """Looks up and formats answer texts for one locale."""

    def __init__(self, locale: str = DEFAULT_LOCALE) -> None:
        if locale not in CATALOG:
            raise ValueError(f"Unsupported locale: {locale}")
        self.locale = locale
        self._entries = CATALOG[locale]

    def __call__(self, key: str, **values: Any) -> str:
        return self._entries[key].format(**values)
