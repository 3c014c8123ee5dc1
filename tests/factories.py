# tests/factories.py
"""Valid form payloads for tests. Override any field with keyword arguments."""

from datetime import date, datetime


def vehicle_payload(**overrides):
    data = {
        "plate": "ABC1D23",
        "state": "PR",
        "inspection_date": date(2024, 3, 10),
        "brand": "Fiat",
        "model": "Uno",
        "vehicle_type": "Automóvel",
        "has_key": True,
        "chassis_observation": "",
        "city": "Medianeira",
        "bou_trv": "2024/0001",
        "has_no_plate": False,
    }
    data.update(overrides)
    return data


def asset_payload(**overrides):
    data = {
        "sector": "Comando",
        "general_tag": "G-100",
        "local_tag": "L-7",
        "description": "Mesa de escritório",
        "asset_class": "Mobiliário em geral",
        "conservation_state": "Bom",
        "acquisition_date": date(2022, 5, 2),
        "incorporation_type": "Aquisição/compra",
        "acquisition_value": 850.0,
        "evaluation_value": 700.0,
        "net_value": 650.0,
    }
    data.update(overrides)
    return data


def event_payload(**overrides):
    data = {
        "title": "Escolta de presos",
        "order_number": "OS-042",
        "start": datetime(2030, 1, 15, 8, 0),
        "end": datetime(2030, 1, 15, 12, 0),
        "location": "Fórum de Medianeira",
        "description": None,
    }
    data.update(overrides)
    return data
