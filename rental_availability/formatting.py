from datetime import date
from urllib.parse import urlencode

from .config import get_host_name, get_room_url
from .models import AlternativeWindow

# Short month names as rendered by the fr-FR locale
FR_MONTHS = {
    1: "janv.", 2: "févr.", 3: "mars", 4: "avr.", 5: "mai", 6: "juin",
    7: "juil.", 8: "août", 9: "sept.", 10: "oct.", 11: "nov.", 12: "déc.",
}


def format_short_date(d: date) -> str:
    """'1 juin', '14 févr.'"""
    return f"{d.day} {FR_MONTHS[d.month]}"


def alternative_label(window: AlternativeWindow) -> str:
    return f"{format_short_date(window.start)} → {format_short_date(window.end)} ({window.nights} nuits dispo)"


def airbnb_url(check_in: date, check_out: date, guests: int) -> str:
    query = urlencode({
        "check_in": check_in.isoformat(),
        "check_out": check_out.isoformat(),
        "guests": guests,
    })
    return f"{get_room_url()}?{query}"


def whatsapp_message(check_in: date, check_out: date, nights: int, available: bool) -> str:
    host = get_host_name()
    start = format_short_date(check_in)
    end = format_short_date(check_out)
    if available:
        return f"Salut {host} ! L'appart est dispo du {start} au {end} ({nights} nuits). Je voudrais réserver !"
    return f"Salut {host} ! Je cherchais du {start} au {end} mais c'est pris. Est-ce qu'on peut s'arranger ?"
