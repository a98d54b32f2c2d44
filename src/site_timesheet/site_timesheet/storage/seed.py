"""Initial demo data used when a deployment starts with empty collections."""

DEFAULT_SITES = [
    {"id": "1", "name": "Rezidencia Horský Park", "address": "Bratislava, Horská 10"},
    {"id": "2", "name": "Business Centrum Nivy", "address": "Bratislava, Mlynské Nivy 5"},
]

DEFAULT_WORKERS = [
    {"id": "1", "name": "Ján Novák", "role": "Murár"},
    {"id": "2", "name": "Peter Kováč", "role": "Zvárač"},
    {"id": "3", "name": "Marek Horváth", "role": "Pomocný robotník"},
]
