def _donation(client, income=20.0):
    return client.post('/donations', json={'coins': 0, 'income_eur': income}).json()


def test_supporter_crud(signed_in):
    donation = _donation(signed_in)
    resp = signed_in.post('/supporters', json={'name': 'Ana', 'donation_id': donation['id']})
    assert resp.status_code == 200
    supporter = resp.json()
    assert supporter == {'id': supporter['id'], 'name': 'Ana', 'donation_id': donation['id']}

    assert signed_in.get('/supporters').json() == [supporter]
    assert signed_in.get(f"/supporters/{supporter['id']}").json() == supporter

    resp = signed_in.put(f"/supporters/{supporter['id']}", json={'name': 'Ana B', 'donation_id': donation['id']})
    assert resp.json()['name'] == 'Ana B'

    assert signed_in.delete(f"/supporters/{supporter['id']}").status_code == 200
    # no cascade to the donation
    assert signed_in.get(f"/donations/{donation['id']}").status_code == 200


def test_supporter_requires_existing_donation(signed_in):
    resp = signed_in.post('/supporters', json={'name': 'Ana', 'donation_id': 42})
    assert resp.status_code == 404
    assert resp.text == 'Donation 42 not found'


def test_supporter_name_required(signed_in):
    donation = _donation(signed_in)
    resp = signed_in.post('/supporters', json={'name': '', 'donation_id': donation['id']})
    assert resp.status_code == 422


def test_deleting_donation_leaves_supporter_dangling(signed_in):
    donation = _donation(signed_in)
    supporter = signed_in.post('/supporters', json={'name': 'Ana', 'donation_id': donation['id']}).json()
    signed_in.delete(f"/donations/{donation['id']}")

    assert signed_in.get(f"/supporters/{supporter['id']}").json()['donation_id'] == donation['id']
    # a name-only edit may resend the dangling link
    resp = signed_in.put(f"/supporters/{supporter['id']}", json={'name': 'Bo', 'donation_id': donation['id']})
    assert resp.status_code == 200
    # but cannot move to another missing donation
    resp = signed_in.put(f"/supporters/{supporter['id']}", json={'name': 'Bo', 'donation_id': 999})
    assert resp.status_code == 404
