import json
from unittest import mock

import pytest
import requests

SHEET_CSV = (
    "Feature,Feature Description,Module,Point of Contact,Requested Clients\n"
    'Blackout Periods,"No leave on\nthese dates",Leave,Priya,"Acme, Globex; Initech"\n'
    "Geo Punch,Location punch-in,Time,Daniel,Hooli\n"
    ",Orphan row,Time,,Acme\n"
)

SEED = [
    {
        "module": "Leave",
        "name": "Seeded Feature",
        "description": "From the seed",
        "point_of_contact": "",
        "requested_clients": ["Acme", "Globex"],
    },
    {
        "module": "PIM",
        "name": "Custom Fields",
        "description": "",
        "point_of_contact": "Aisha",
        "requested_clients": [],
    },
]


def make_response(text: str = "", status: int = 200):
    resp = mock.Mock(spec=requests.Response)
    resp.status_code = status
    resp.content = text.encode("utf-8")
    return resp


@pytest.fixture
def seed_file(tmp_path):
    path = tmp_path / "seed.json"
    path.write_text(json.dumps(SEED), encoding="utf-8")
    return path


@pytest.fixture
def session():
    return mock.Mock(spec=requests.Session)
