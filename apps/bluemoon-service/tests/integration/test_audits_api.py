def _h(user):
    return {"X-Auth-Request-Email": user.email}


def test_writes_are_audited(client, admin, fee_factory, household_factory, payment_factory):
    r = client.post("/api/fees", json={"name": "Gym", "type": "voluntary", "amount": 1000}, headers=_h(admin))
    fee_id = r.json()["id"]
    client.delete(f"/api/fees/{fee_id}", headers=_h(admin))
    payment = payment_factory(fee_factory(), household_factory())
    client.put(f"/api/payments/{payment.id}/refund", json={"reason": "Moved out"}, headers=_h(admin))

    r = client.get("/api/audits", headers=_h(admin))
    assert r.status_code == 200, r.text
    entries = r.json()
    actions = [e["actionType"] for e in entries]
    assert set(actions) == {"fee_create", "fee_deactivate", "payment_refund"}
    refund = next(e for e in entries if e["actionType"] == "payment_refund")
    assert refund["targetId"] == str(payment.id)
    assert refund["actorUserId"] == str(admin.id)
    assert refund["metadata"] == {"reason": "Moved out"}


def test_audits_paging_and_admin_only(client, admin, manager):
    for code in ("HK1", "HK2", "HK3"):
        client.post("/api/households", json={"householdCode": code, "apartmentNumber": code}, headers=_h(admin))

    r = client.get("/api/audits", params={"limit": 2}, headers=_h(admin))
    assert len(r.json()) == 2
    r = client.get("/api/audits", params={"skip": 2}, headers=_h(admin))
    assert len(r.json()) == 1

    r = client.get("/api/audits", headers=_h(manager))
    assert r.status_code == 403
