# tests/services/test_audit_mirrors.py
"""Tests for the mirror audit script."""

from sqlalchemy import delete

from momentum.models import Message
from momentum.scripts import audit_mirrors


def test_audit_reports_orphans(messaging, db_session, alice, bob) -> None:
    draft = messaging.draft(alice.id, bob.id, "hi")
    sent = messaging.send(draft.id, alice.id, bob.id)
    assert audit_mirrors.audit(messaging) == []

    db_session.execute(delete(Message).where(Message.id == sent.mirror_id))
    db_session.commit()

    lines = audit_mirrors.audit(messaging)
    assert len(lines) == 1
    assert f"message {draft.id} (sent)" in lines[0]
    assert "unresolved" in lines[0]


def test_main_exit_status(monkeypatch, messaging, db_session, alice, bob, capsys) -> None:
    monkeypatch.setattr(audit_mirrors, "SessionLocal", lambda: db_session)
    monkeypatch.setattr(db_session, "close", lambda: None)

    assert audit_mirrors.main([]) == 0
    assert "0 orphaned record(s)" in capsys.readouterr().out

    draft = messaging.draft(alice.id, bob.id, "hi")
    sent = messaging.send(draft.id, alice.id, bob.id)
    db_session.execute(delete(Message).where(Message.id == sent.mirror_id))
    db_session.commit()

    assert audit_mirrors.main(["--quiet"]) == 1
    assert capsys.readouterr().out == ""
