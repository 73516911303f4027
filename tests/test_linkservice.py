import pytest

from linkbio.contracts import AuthContext
from linkbio.errors import ForbiddenError, NotFoundError, ValidationError
from linkbio.linkservice import InMemoryLinkRepo, LinkIn, LinkService, ReorderItem
from linkbio.authservice import InMemoryUserRepo


@pytest.fixture
def users():
    return InMemoryUserRepo()


@pytest.fixture
def svc(users):
    return LinkService(links=InMemoryLinkRepo(), users=users)


def _user(users, name):
    rec = users.create(username=name, email=f"{name}@example.com", password_hash="x")
    return AuthContext(user_id=rec.id)


def _new_link(client, headers, **overrides):
    body = {"title": "Blog", "url": "https://blog.example.com", **overrides}
    res = client.post("/api/links", headers=headers, json=body)
    assert res.status_code == 201, res.text
    return res.json()["data"]


# ---------- Service level ----------

def test_reorder_checks_every_item_before_writing(svc, users):
    alice = _user(users, "alice")
    bob = _user(users, "bob")
    a1 = svc.create(alice, LinkIn(title="a1", url="https://a.example.com/1", order=0))
    a2 = svc.create(alice, LinkIn(title="a2", url="https://a.example.com/2", order=1))
    b1 = svc.create(bob, LinkIn(title="b1", url="https://b.example.com/1", order=0))

    with pytest.raises(ForbiddenError):
        svc.reorder(alice, [ReorderItem(id=a1.id, order=5), ReorderItem(id=b1.id, order=9)])
    assert svc.links.get(a1.id).order == 0
    assert svc.links.get(b1.id).order == 0

    with pytest.raises(NotFoundError):
        svc.reorder(alice, [ReorderItem(id=a2.id, order=7), ReorderItem(id="missing", order=1)])
    assert svc.links.get(a2.id).order == 1

    svc.reorder(alice, [ReorderItem(id=a1.id, order=1), ReorderItem(id=a2.id, order=0)])
    assert [l.title for l in svc.list_mine(alice)] == ["a2", "a1"]


def test_reorder_requires_a_list(svc, users):
    alice = _user(users, "alice")
    with pytest.raises(ValidationError):
        svc.reorder(alice, None)
    svc.reorder(alice, [])


def test_list_public_unknown_user(svc):
    with pytest.raises(NotFoundError):
        svc.list_public("ghost")


# ---------- HTTP ----------

def test_link_crud(client, signup):
    body, headers = signup()
    created = _new_link(client, headers, icon="https://cdn.example.com/i.png")
    assert created["userId"] == body["user"]["id"]
    assert created["title"] == "Blog"
    assert created["isActive"] is True
    assert created["order"] == 0
    assert created["icon"] == "https://cdn.example.com/i.png"

    listing = client.get("/api/links", headers=headers).json()
    assert listing["success"] is True
    assert listing["count"] == 1
    assert listing["data"][0]["id"] == created["id"]

    updated = client.put(
        f"/api/links/{created['id']}", headers=headers,
        json={"title": "Journal", "url": "https://journal.example.com"},
    )
    assert updated.status_code == 200
    data = updated.json()["data"]
    assert data["title"] == "Journal"
    assert data["url"] == "https://journal.example.com"
    assert data["icon"] == "https://cdn.example.com/i.png"

    removed = client.delete(f"/api/links/{created['id']}", headers=headers)
    assert removed.status_code == 200
    assert removed.json() == {"success": True, "message": "Link removed"}
    assert client.get("/api/links", headers=headers).json()["count"] == 0


def test_links_listed_by_order(client, signup):
    _, headers = signup()
    _new_link(client, headers, title="third", order=2)
    _new_link(client, headers, title="first", order=0)
    _new_link(client, headers, title="second", order=1)
    titles = [l["title"] for l in client.get("/api/links", headers=headers).json()["data"]]
    assert titles == ["first", "second", "third"]


def test_public_links_only_show_active(client, signup):
    _, headers = signup()
    _new_link(client, headers, title="shown")
    _new_link(client, headers, title="hidden", isActive=False)

    res = client.get("/api/links/public/alice")
    assert res.status_code == 200
    assert res.json()["count"] == 1
    assert [l["title"] for l in res.json()["data"]] == ["shown"]

    # owner still sees both
    assert client.get("/api/links", headers=headers).json()["count"] == 2

    missing = client.get("/api/links/public/nobody")
    assert missing.status_code == 404
    assert missing.json()["message"] == "User not found"


def test_link_validation(client, signup):
    _, headers = signup()
    bad_url = client.post("/api/links", headers=headers, json={"title": "x", "url": "not a url"})
    assert bad_url.status_code == 400
    assert bad_url.json()["message"] == "Validation error"

    long_title = client.post("/api/links", headers=headers, json={"title": "x" * 51, "url": "https://e.com"})
    assert long_title.status_code == 400

    blank_icon = client.post("/api/links", headers=headers, json={"title": "x", "url": "https://e.com", "icon": ""})
    assert blank_icon.status_code == 201
    assert blank_icon.json()["data"]["icon"] is None


def test_other_users_link_is_forbidden_and_untouched(client, signup):
    _, alice = signup("alice")
    _, bob = signup("bob")
    link = _new_link(client, alice)

    upd = client.put(f"/api/links/{link['id']}", headers=bob, json={"title": "pwned", "url": "https://evil.example.com"})
    assert upd.status_code == 403
    assert upd.json() == {"success": False, "message": "Not authorized"}

    rm = client.delete(f"/api/links/{link['id']}", headers=bob)
    assert rm.status_code == 403

    mine = client.get("/api/links", headers=alice).json()["data"]
    assert mine[0]["title"] == "Blog"


def test_missing_link_is_not_found(client, signup):
    _, headers = signup()
    res = client.delete("/api/links/does-not-exist", headers=headers)
    assert res.status_code == 404
    assert res.json()["message"] == "Link not found"


def test_reorder_route(client, signup):
    _, headers = signup()
    a = _new_link(client, headers, title="a", order=0)
    b = _new_link(client, headers, title="b", order=1)

    res = client.put("/api/links/reorder", headers=headers, json={"links": [
        {"id": a["id"], "order": 1},
        {"id": b["id"], "order": 0},
    ]})
    assert res.status_code == 200
    assert res.json() == {"success": True, "message": "Links reordered successfully"}
    titles = [l["title"] for l in client.get("/api/links", headers=headers).json()["data"]]
    assert titles == ["b", "a"]

    missing = client.put("/api/links/reorder", headers=headers, json={})
    assert missing.status_code == 400
    assert missing.json()["message"] == "Invalid links data"


def test_link_routes_require_auth(client):
    assert client.get("/api/links").status_code == 401
    assert client.post("/api/links", json={"title": "x", "url": "https://e.com"}).status_code == 401
