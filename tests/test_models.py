"""Tests for record projection in polaris_o365.models."""

from polaris_o365.models import O365Subscription, O365User, SlaDomain, project


def test_user_projection():
    node = {
        "id": "u1",
        "name": "Ada Lovelace",
        "emailAddress": "ada@example.test",
        "slaAssignment": "Direct",
        "effectiveSlaDomain": {"id": "sla-1", "name": "Gold"},
    }
    user = O365User.from_node(node)
    assert user.to_dict() == {
        "id": "u1",
        "name": "Ada Lovelace",
        "emailAddress": "ada@example.test",
        "slaAssignment": "Direct",
        "effectiveSlaDomainName": "Gold",
    }


def test_user_without_effective_sla():
    user = O365User.from_node({"id": "u1", "name": "n"})
    assert user.effective_sla_domain_name is None

    user = O365User.from_node({"id": "u2", "effectiveSlaDomain": None})
    assert user.effective_sla_domain_name is None


def test_subscription_projection():
    node = {
        "id": "org-1",
        "name": "Contoso",
        "status": "ACTIVE",
        "usersCount": 120,
        "unprotectedUsersCount": 4,
        "effectiveSlaDomain": {"id": "sla-1", "name": "Gold"},
        "configuredSlaDomain": None,
    }
    sub = O365Subscription.from_node(node)
    assert sub.to_dict() == {
        "id": "org-1",
        "name": "Contoso",
        "status": "ACTIVE",
        "usersCount": 120,
        "unprotectedUsersCount": 4,
        "effectiveSlaDomainName": "Gold",
        "configuredSlaDomainName": None,
        "effectiveSlaDomainId": "sla-1",
        "configuredSlaDomainId": None,
    }


def test_sla_domain_projection():
    sla = SlaDomain.from_node({"id": "sla-1", "name": "Bronze"})
    assert sla == SlaDomain(id="sla-1", name="Bronze", description=None)


def test_project_keeps_order_and_duplicates():
    nodes = [{"id": "b"}, {"id": "a"}, {"id": "b"}]
    assert [u.id for u in project(nodes, O365User)] == ["b", "a", "b"]
