from decimal import Decimal


def add_expense(client, group_id, paid_by, amount, split_among, description="Dinner"):
    return client.post(f"/api/v1/expenses/{group_id}/add", json={
        "description": description,
        "amount": amount,
        "paid_by": paid_by,
        "split_among": split_among,
        "created_by": paid_by,
    })


def test_root(client):
    res = client.get("/")
    assert res.status_code == 200


def test_create_group_makes_creator_admin(client, group):
    res = client.get(f"/api/v1/groups/{group}")
    assert res.status_code == 200
    body = res.json()
    assert body["name"] == "Trip"
    roles = {m["uid"]: m["role"] for m in body["members"]}
    assert roles == {"A": "admin", "B": "member", "C": "member"}


def test_unknown_group_is_404(client):
    assert client.get("/api/v1/groups/999").status_code == 404
    assert client.get("/api/v1/balances/999").status_code == 404


def test_duplicate_member_conflicts(client, group):
    res = client.post(f"/api/v1/groups/{group}/members", json={"uid": "B", "display_name": "Bob"})
    assert res.status_code == 409


def test_my_groups_public_and_search(client, group):
    assert [g["id"] for g in client.get("/api/v1/groups/my-groups", params={"uid": "B"}).json()] == [group]
    assert client.get("/api/v1/groups/my-groups", params={"uid": "nobody"}).json() == []
    assert [g["id"] for g in client.get("/api/v1/groups/public").json()] == [group]
    assert [g["id"] for g in client.get("/api/v1/groups/search", params={"q": "WEEKEND"}).json()] == [group]
    assert client.get("/api/v1/groups/search", params={"q": "office"}).json() == []


def test_add_and_list_expenses(client, group):
    res = add_expense(client, group, "A", 90, ["A", "B", "C"])
    assert res.status_code == 201
    body = res.json()
    assert body["split_among"] == ["A", "B", "C"]
    assert Decimal(body["amount"]) == Decimal("90")

    add_expense(client, group, "B", 12, ["C", "B"], description="Taxi")

    listed = client.get(f"/api/v1/expenses/{group}/all").json()
    assert [e["description"] for e in listed] == ["Taxi", "Dinner"]
    assert listed[0]["split_among"] == ["C", "B"]


def test_expense_validation(client, group):
    assert add_expense(client, group, "A", 10, []).status_code == 422
    assert add_expense(client, group, "A", 10, ["A", "A"]).status_code == 422
    assert add_expense(client, group, "A", 0, ["A"]).status_code == 422
    assert add_expense(client, group, "X", 10, ["A"]).status_code == 400
    assert add_expense(client, group, "A", 10, ["A", "X"]).status_code == 400


def test_balances_three_way_split(client, group):
    add_expense(client, group, "A", 90, ["A", "B", "C"])

    res = client.get(f"/api/v1/balances/{group}")
    assert res.status_code == 200
    body = res.json()

    assert {n["user_id"]: n["amount"] for n in body["net"]} == {"A": 60.0, "B": -30.0, "C": -30.0}
    assert [(s["from_id"], s["to_id"], s["amount"]) for s in body["settlements"]] == [
        ("B", "A", 30.0),
        ("C", "A", 30.0),
    ]
    assert body["settlements"][0]["from_name"] == "Bob"
    assert body["settlements"][0]["to_name"] == "Alice"
    assert body["is_settled"] is False
    assert body["unknown_members"] == []


def test_settlements_update_balances(client, group):
    add_expense(client, group, "A", 90, ["A", "B", "C"])

    for uid in ("B", "C"):
        res = client.post(f"/api/v1/settlements/{group}/add", json={
            "from_user_id": uid, "to_user_id": "A", "amount": 30,
        })
        assert res.status_code == 201

    body = client.get(f"/api/v1/balances/{group}").json()
    assert body["settlements"] == []
    assert body["is_settled"] is True

    history = client.get(f"/api/v1/settlements/{group}/history").json()
    assert [h["from_user_id"] for h in history] == ["C", "B"]

    assert client.delete(f"/api/v1/settlements/{history[0]['id']}").status_code == 200
    body = client.get(f"/api/v1/balances/{group}").json()
    assert [(s["from_id"], s["to_id"], s["amount"]) for s in body["settlements"]] == [("C", "A", 30.0)]


def test_settlement_validation(client, group):
    url = f"/api/v1/settlements/{group}/add"
    assert client.post(url, json={"from_user_id": "B", "to_user_id": "B", "amount": 5}).status_code == 400
    assert client.post(url, json={"from_user_id": "X", "to_user_id": "A", "amount": 5}).status_code == 403
    assert client.post(url, json={"from_user_id": "B", "to_user_id": "X", "amount": 5}).status_code == 400
    assert client.post(url, json={"from_user_id": "B", "to_user_id": "A", "amount": -5}).status_code == 422


def test_delete_expense(client, group):
    expense_id = add_expense(client, group, "A", 90, ["A", "B", "C"]).json()["id"]
    assert client.delete(f"/api/v1/expenses/{expense_id}").status_code == 200
    assert client.delete(f"/api/v1/expenses/{expense_id}").status_code == 404

    body = client.get(f"/api/v1/balances/{group}").json()
    assert body["settlements"] == []


def test_member_who_left_shows_as_unknown(client, group):
    add_expense(client, group, "A", 90, ["A", "B", "C"])
    assert client.delete(f"/api/v1/groups/{group}/members/C").status_code == 200

    body = client.get(f"/api/v1/balances/{group}").json()
    assert body["unknown_members"] == ["C"]
    carol = [s for s in body["settlements"] if s["from_id"] == "C"][0]
    assert carol["from_name"] is None
    assert carol["amount"] == 30.0


def test_delete_group(client, group):
    add_expense(client, group, "A", 90, ["A", "B", "C"])
    assert client.delete(f"/api/v1/groups/{group}").status_code == 200
    assert client.get(f"/api/v1/groups/{group}").status_code == 404
    assert client.get("/api/v1/system/metrics").json() == {"groups": 0, "expenses": 0, "settlements": 0}
    assert client.get("/api/v1/activities/", params={"group_id": [group]}).json() == []


def test_activity_feed(client, group):
    add_expense(client, group, "A", 90, ["A", "B", "C"])
    client.post(f"/api/v1/settlements/{group}/add", json={"from_user_id": "B", "to_user_id": "A", "amount": 30})

    feed = client.get("/api/v1/activities/", params={"group_id": [group]}).json()
    assert [a["type"] for a in feed] == [
        "settlement", "expense", "member_joined", "member_joined", "group_created",
    ]
    assert feed[0]["description"] == "paid Alice"
    assert feed[0]["user_name"] == "Bob"

    assert client.get("/api/v1/activities/").json() == []


def test_system_health(client):
    assert client.get("/api/v1/system/health").json() == {"status": "ok"}


def test_balance_below_five_cents_is_not_settled(client, group):
    add_expense(client, group, "A", "0.06", ["A", "B", "C"])

    body = client.get(f"/api/v1/balances/{group}").json()
    assert [(s["from_id"], s["to_id"], s["amount"]) for s in body["settlements"]] == [
        ("B", "A", 0.02),
        ("C", "A", 0.02),
    ]
    assert body["is_settled"] is False


def test_search_treats_wildcards_literally(client, group):
    other = client.post("/api/v1/groups/", json={
        "name": "100% fun",
        "is_public": True,
        "creator": {"uid": "D", "display_name": "Dan"},
    }).json()["id"]

    assert [g["id"] for g in client.get("/api/v1/groups/search", params={"q": "100%"}).json()] == [other]
    assert client.get("/api/v1/groups/search", params={"q": "%"}).json()[0]["id"] == other
    assert len(client.get("/api/v1/groups/search", params={"q": "%"}).json()) == 1
    assert client.get("/api/v1/groups/search", params={"q": "_"}).json() == []


def test_join_request_approved(client, group):
    url = f"/api/v1/groups/{group}/join-requests"
    res = client.post(url, json={"uid": "D", "display_name": "Dan"})
    assert res.status_code == 201
    # asking twice keeps a single request
    assert client.post(url, json={"uid": "D", "display_name": "Dan"}).status_code == 201
    assert [r["uid"] for r in client.get(url).json()] == ["D"]
    assert [r["uid"] for r in client.get(f"/api/v1/groups/{group}").json()["join_requests"]] == ["D"]

    res = client.post(f"{url}/D/approve")
    assert res.status_code == 200
    assert res.json()["role"] == "member"

    assert client.get(url).json() == []
    members = [m["uid"] for m in client.get(f"/api/v1/groups/{group}").json()["members"]]
    assert members == ["A", "B", "C", "D"]

    feed = client.get("/api/v1/activities/", params={"group_id": [group]}).json()
    assert feed[0]["type"] == "member_joined"
    assert feed[0]["user_name"] == "Dan"

    # a member cannot ask again
    assert client.post(url, json={"uid": "D", "display_name": "Dan"}).status_code == 409


def test_join_request_rejected(client, group):
    url = f"/api/v1/groups/{group}/join-requests"
    client.post(url, json={"uid": "E", "display_name": "Eve"})

    assert client.delete(f"{url}/E").status_code == 200
    assert client.get(url).json() == []
    assert client.delete(f"{url}/E").status_code == 404
    assert client.post(f"{url}/E/approve").status_code == 404
    assert "E" not in [m["uid"] for m in client.get(f"/api/v1/groups/{group}").json()["members"]]


def test_budget_and_monthly_spend(client, group):
    add_expense(client, group, "A", 90, ["A", "B", "C"])
    add_expense(client, group, "B", 12, ["C", "B"], description="Taxi")

    assert client.get("/api/v1/users/C/budget").json() == {"uid": "C", "monthly_budget": None}

    body = client.get("/api/v1/users/C/monthly-expenses").json()
    assert body["total"] == 36.0
    assert body["monthly_budget"] is None
    assert body["remaining"] is None

    assert client.put("/api/v1/users/C/budget", json={"amount": 50}).status_code == 200
    assert client.put("/api/v1/users/C/budget", json={"amount": 40}).status_code == 200
    assert client.get("/api/v1/users/C/budget").json() == {"uid": "C", "monthly_budget": 40.0}

    body = client.get("/api/v1/users/C/monthly-expenses").json()
    assert body["monthly_budget"] == 40.0
    assert body["remaining"] == 4.0

    # the payer's share only counts when they are in the split
    assert client.get("/api/v1/users/A/monthly-expenses").json()["total"] == 30.0
    assert client.get("/api/v1/users/Z/monthly-expenses").json()["total"] == 0.0
    assert client.put("/api/v1/users/C/budget", json={"amount": -1}).status_code == 422


def test_delete_activity(client, group):
    feed = client.get("/api/v1/activities/", params={"group_id": [group]}).json()
    newest = feed[0]["id"]

    assert client.delete(f"/api/v1/activities/{newest}").status_code == 200
    assert client.delete(f"/api/v1/activities/{newest}").status_code == 404

    remaining = client.get("/api/v1/activities/", params={"group_id": [group]}).json()
    assert newest not in [a["id"] for a in remaining]
    assert len(remaining) == len(feed) - 1
