"""Weekday enumerators. Weeks have no calendar dimension, only these seven keys."""

WEEKDAYS = (
    "segunda",
    "terca",
    "quarta",
    "quinta",
    "sexta",
    "sabado",
    "domingo",
)

WEEKDAY_NAMES = {
    "segunda": "Segunda-feira",
    "terca": "Terça-feira",
    "quarta": "Quarta-feira",
    "quinta": "Quinta-feira",
    "sexta": "Sexta-feira",
    "sabado": "Sábado",
    "domingo": "Domingo",
}


def is_weekday(value) -> bool:
    return isinstance(value, str) and value in WEEKDAYS
