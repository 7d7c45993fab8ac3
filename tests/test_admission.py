from datetime import timedelta

import pytest

from irecruit_core.admission import AdmissionReason, check_admission
from irecruit_core.domain.errors import BadRequestError, NotFoundError
from conftest import NOW, OFFER_ID, SESSION_ID, make_candidature, make_tranche


def test_missing_tranche_is_not_found():
    res = check_admission(None, make_candidature(), now=NOW)
    assert not res.ok
    assert res.reason is AdmissionReason.NOT_FOUND
    with pytest.raises(NotFoundError, match="Tranche not found"):
        res.raise_for_reason()


@pytest.mark.parametrize("shift", [timedelta(days=-30), timedelta(0), timedelta(days=30)])
def test_closed_tranche_fails_whatever_the_window(shift):
    tranche = make_tranche(is_open=False, start_date=NOW + shift - timedelta(days=1), end_date=NOW + shift + timedelta(days=1))
    res = check_admission(tranche, make_candidature(), now=NOW)
    assert res.reason is AdmissionReason.CLOSED
    with pytest.raises(BadRequestError, match="Tranche is closed"):
        res.raise_for_reason()


def test_before_start_is_not_active():
    tranche = make_tranche(start_date=NOW + timedelta(minutes=1), end_date=NOW + timedelta(days=2))
    assert check_admission(tranche, make_candidature(), now=NOW).reason is AdmissionReason.NOT_ACTIVE


def test_after_end_is_not_active():
    tranche = make_tranche(start_date=NOW - timedelta(days=2), end_date=NOW - timedelta(seconds=1))
    res = check_admission(tranche, make_candidature(), now=NOW)
    assert res.reason is AdmissionReason.NOT_ACTIVE
    assert res.message == "Tranche is not active"


def test_window_bounds_are_inclusive():
    assert check_admission(make_tranche(start_date=NOW), make_candidature(), now=NOW).ok
    assert check_admission(make_tranche(end_date=NOW), make_candidature(), now=NOW).ok


def test_naive_dates_are_read_as_utc():
    naive = NOW.replace(tzinfo=None)
    tranche = make_tranche(start_date=naive - timedelta(hours=1), end_date=naive + timedelta(hours=1))
    assert check_admission(tranche, make_candidature(), now=NOW).ok


@pytest.mark.parametrize("missing", ["session", "job_offer"])
def test_tranche_without_session_or_offer_is_misconfigured(missing):
    tranche = make_tranche(**{missing: None})
    res = check_admission(tranche, make_candidature(), now=NOW)
    assert res.reason is AdmissionReason.MISCONFIGURED
    with pytest.raises(BadRequestError):
        res.raise_for_reason()


def test_conflicting_offer_is_a_mismatch():
    res = check_admission(make_tranche(), make_candidature(), asserted_offer_id="ffffffffffffffffffffffff", now=NOW)
    assert res.reason is AdmissionReason.MISMATCH
    with pytest.raises(BadRequestError, match="Job offer does not match tranche"):
        res.raise_for_reason()


def test_matching_or_omitted_offer_uses_tranche_offer():
    for asserted in (None, OFFER_ID):
        res = check_admission(make_tranche(), make_candidature(), asserted_offer_id=asserted, now=NOW)
        assert res.ok
        assert res.offer_id == OFFER_ID
        assert res.session_id == SESSION_ID


def test_missing_dossier_blocks_application():
    res = check_admission(make_tranche(), None, now=NOW)
    assert res.reason is AdmissionReason.DOSSIER_NOT_FOUND
    with pytest.raises(NotFoundError):
        res.raise_for_reason()


def test_checks_run_in_order():
    # fermée ET hors fenêtre ET mal configurée: la première règle l'emporte
    tranche = make_tranche(is_open=False, start_date=NOW + timedelta(days=1), end_date=NOW + timedelta(days=2), session=None)
    assert check_admission(tranche, None, asserted_offer_id="x", now=NOW).reason is AdmissionReason.CLOSED
    tranche = make_tranche(start_date=NOW + timedelta(days=1), end_date=NOW + timedelta(days=2), session=None)
    assert check_admission(tranche, None, now=NOW).reason is AdmissionReason.NOT_ACTIVE
