from datetime import datetime, timezone

from irecruit_core.domain.candidate import Application, ApplicationStatus, Candidature
from irecruit_core.profile import as_list, build_candidate_profile
from conftest import NOW, USER_ID, make_candidature

CREATED = datetime(2026, 2, 1, 8, 30, tzinfo=timezone.utc)


def _app(**kw):
    data = dict(user=USER_ID, offer="o", session="s", tranche="t", created_at=CREATED)
    data.update(kw)
    return Application(**data)


def test_single_experience_pedagogique_is_wrapped():
    cand = make_candidature(experiencePedagogique={"etablissement": "Lycée Descartes", "duree": "2 ans"})
    profile = build_candidate_profile(_app(), cand, now=NOW).to_wire()
    assert profile["professionalInformation"]["experiencePedagogique"] == [
        {"etablissement": "Lycée Descartes", "duree": "2 ans"}
    ]


def test_residanat_list_kept_and_absent_is_empty():
    items = [{"annee": "2020"}, {"annee": "2021"}]
    profile = build_candidate_profile(_app(), make_candidature(residanat=items), now=NOW).to_wire()
    assert profile["professionalInformation"]["residanat"] == items
    assert profile["professionalInformation"]["experiencePedagogique"] == []


def test_missing_candidature_gives_total_defaults():
    profile = build_candidate_profile(_app(), None, now=NOW).to_wire()
    personal = profile["personalInformation"]
    assert personal["nom"] == ""
    assert personal["email"] == ""
    assert personal["experiences"] == {}
    assert personal["situationDeHandicap"] == {}
    assert personal["files"] == {"cvPdf": "", "cinPdf": "", "bacPdf": "", "attestation": ""}
    assert all(v == [] for v in profile["professionalInformation"].values())
    assert profile["applicationAttachments"] == {"declarationPdf": "", "motivationLetterPdf": ""}
    assert profile["applicationDiploma"] == ""


def test_personal_fields_and_files_are_copied():
    profile = build_candidate_profile(_app(), make_candidature(), now=NOW).to_wire()
    assert profile["personalInformation"]["prenom"] == "Salma"
    assert profile["personalInformation"]["cin"] == "AB123456"
    assert profile["personalInformation"]["files"]["cvPdf"] == "uploads/candidats/AB123456/cv.pdf"
    assert profile["personalInformation"]["files"]["bacPdf"] == ""


def test_applied_date_prefers_receipt_then_creation_then_now():
    received = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)
    assert build_candidate_profile(_app(recu_candidature=received), None, now=NOW).applied_date == "2026-03-01T12:00:00.000Z"
    assert build_candidate_profile(_app(), None, now=NOW).applied_date == "2026-02-01T08:30:00.000Z"
    assert build_candidate_profile(_app(created_at=None), None, now=NOW).applied_date == "2026-03-15T10:00:00.000Z"


def test_status_and_attachments_projection():
    app = _app(
        statut={"fr": "Accepté", "en": "Accepted", "ar": "مقبول"},
        application_diploma="Master Mathématiques",
        attachment={"declarationPdf": "uploads/candidats/AB123456/applications/decl.pdf"},
    )
    profile = build_candidate_profile(app, None, now=NOW)
    assert profile.status is ApplicationStatus.ACCEPTED
    wire = profile.to_wire()
    assert wire["_id"] == app.id
    assert wire["status"] == "accepted"
    assert wire["applicationDiploma"] == "Master Mathématiques"
    assert wire["applicationAttachments"]["declarationPdf"].endswith("decl.pdf")
    assert wire["applicationAttachments"]["motivationLetterPdf"] == ""


def test_projection_is_idempotent_and_does_not_mutate():
    cand = make_candidature(experiencePedagogique={"etablissement": "X"})
    app = _app()
    before_cand = cand.model_dump()
    before_app = app.model_dump()
    first = build_candidate_profile(app, cand, now=NOW).to_wire()
    second = build_candidate_profile(app, cand, now=NOW).to_wire()
    assert first == second
    assert cand.model_dump() == before_cand
    assert app.model_dump() == before_app


def test_heterogeneous_stored_values_do_not_break_projection():
    cand = Candidature.model_validate(
        {
            "user": USER_ID,
            "personalInformation": {"nom": None, "experiences": ["unexpected"], "files": None},
            "professionalInformation": {"publications": None},
        }
    )
    wire = build_candidate_profile(_app(), cand, now=NOW).to_wire()
    assert wire["personalInformation"]["nom"] == ""
    assert wire["personalInformation"]["experiences"] == {}
    assert wire["professionalInformation"]["publications"] == []


def test_as_list():
    assert as_list(None) == []
    assert as_list({}) == [{}]
    assert as_list("") == []
    assert as_list({"a": 1}) == [{"a": 1}]
    assert as_list([1, 2]) == [1, 2]
