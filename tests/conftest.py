from datetime import datetime, timedelta, timezone

import pytest

from irecruit_core.adapters.local_storage import LocalFileStorage
from irecruit_core.adapters.sqlite_repository import SQLiteDocumentStore
from irecruit_core.domain.candidate import Candidature
from irecruit_core.domain.job import JobOffer
from irecruit_core.domain.tranche import Session, Tranche
from irecruit_core.services.applications_service import ApplicationsService
from irecruit_core.services.container import build_container
from irecruit_core.services.job_offers_service import JobOffersService

NOW = datetime(2026, 3, 15, 10, 0, tzinfo=timezone.utc)

USER_ID = "a1a1a1a1a1a1a1a1a1a1a1a1"
OTHER_USER_ID = "b2b2b2b2b2b2b2b2b2b2b2b2"
SESSION_ID = "5e5e5e5e5e5e5e5e5e5e5e5e"
OFFER_ID = "0f0f0f0f0f0f0f0f0f0f0f0f"
TRANCHE_ID = "7a7a7a7a7a7a7a7a7a7a7a7a"


class FakeMailer:
    def __init__(self, fail: bool = False):
        self.sent = []
        self.fail = fail

    def send_email(self, to, subject, html):
        if self.fail:
            raise ConnectionRefusedError("smtp down")
        self.sent.append({"to": to, "subject": subject, "html": html})


class FakeVerifier:
    def __init__(self, tokens=None):
        self.tokens = tokens or {}

    def verify(self, token):
        return self.tokens.get(token)


def make_offer(**overrides) -> JobOffer:
    data = dict(
        id=OFFER_ID,
        title={"fr": "Professeur de mathématiques", "en": "Mathematics teacher", "ar": "أستاذ الرياضيات"},
        description={"fr": "Enseignement", "en": "Teaching", "ar": "تدريس"},
        tag={"fr": "Éducation", "en": "Education", "ar": "تعليم"},
        city={"fr": "Rabat", "en": "Rabat", "ar": "الرباط"},
        department={"fr": "Sciences", "en": "Science", "ar": "العلوم"},
        image_url="/uploads/job-offers/math.png",
        date_publication="2026-03-01",
        depot_avant="2026-04-01",
        candidates_number=5,
        owner=OTHER_USER_ID,
    )
    data.update(overrides)
    return JobOffer(**data)


def make_tranche(**overrides) -> Tranche:
    data = dict(
        id=TRANCHE_ID,
        name="Tranche 1",
        session=SESSION_ID,
        job_offer=OFFER_ID,
        is_open=True,
        start_date=NOW - timedelta(days=5),
        end_date=NOW + timedelta(days=5),
    )
    data.update(overrides)
    return Tranche(**data)


def make_candidature(user=USER_ID, email="candidate@example.com", **professional) -> Candidature:
    return Candidature.model_validate(
        {
            "user": user,
            "personalInformation": {
                "prenom": "Salma",
                "nom": "Bennani",
                "email": email,
                "cin": "AB123456",
                "files": {"cvPdf": "uploads/candidats/AB123456/cv.pdf"},
            },
            "professionalInformation": professional,
        }
    )


@pytest.fixture
def store(tmp_path):
    s = SQLiteDocumentStore(str(tmp_path / "irecruit-test.db"))
    yield s
    s.close()


@pytest.fixture
def seeded_store(store):
    store.save_session(Session(id=SESSION_ID, name="2026", year=2026, is_active=True))
    store.insert_job_offer(make_offer())
    store.save_tranche(make_tranche())
    store.save_candidature(make_candidature())
    return store


@pytest.fixture
def storage(tmp_path):
    return LocalFileStorage(str(tmp_path / "files"))


@pytest.fixture
def mailer():
    return FakeMailer()


@pytest.fixture
def applications_service(seeded_store, storage, mailer):
    return ApplicationsService(
        applications=seeded_store,
        candidatures=seeded_store,
        tranches=seeded_store,
        storage=storage,
        mailer=mailer,
        clock=lambda: NOW,
    )


@pytest.fixture
def job_offers_service(seeded_store, storage):
    return JobOffersService(job_offers=seeded_store, applications=seeded_store, storage=storage)


@pytest.fixture
def container(seeded_store, storage, mailer):
    verifier = FakeVerifier({"user-token": USER_ID, "admin-token": OTHER_USER_ID})
    return build_container(seeded_store, storage, mailer, verifier, clock=lambda: NOW)
