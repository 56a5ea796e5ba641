"""
Task endpoints for agents and superadmins.
"""


def _new_task(property_id, **extra):
    return {"title": "Cambiar cerradura", "description": "Puerta principal", "property": property_id, **extra}


def test_agent_creates_task_assigned_to_itself(client, agent, auth, make_property):
    prop = make_property(agent)

    response = client.post("/api/tasks/agent", json=_new_task(prop.id), headers=auth(agent))

    assert response.status_code == 201
    task = response.json()["task"]
    assert task["assignedTo"]["id"] == agent.id
    assert task["property"]["id"] == prop.id
    assert task["property"]["owner"] == agent.id
    assert task["isCompleted"] is False


def test_agent_cannot_create_on_foreign_property(client, agent, other_agent, auth, make_property):
    prop = make_property(agent)

    foreign = client.post("/api/tasks/agent", json=_new_task(prop.id), headers=auth(other_agent))
    missing = client.post("/api/tasks/agent", json=_new_task(9999), headers=auth(other_agent))

    assert foreign.status_code == missing.status_code == 404
    assert foreign.json() == missing.json() == {"detail": "Property not found"}


def test_task_requires_property(client, agent, auth):
    response = client.post("/api/tasks/agent", json={"title": "x", "description": "y"}, headers=auth(agent))

    assert response.status_code == 400


def test_foreign_task_is_not_found(client, agent, other_agent, auth, make_property, make_task):
    task = make_task(make_property(agent))

    assert client.get(f"/api/tasks/agent/{task.id}", headers=auth(agent)).status_code == 200
    foreign = client.get(f"/api/tasks/agent/{task.id}", headers=auth(other_agent))
    assert foreign.status_code == 404
    assert foreign.json()["detail"] == "Task not found"


def test_agent_update_cannot_move_task(client, agent, other_agent, auth, make_property, make_task):
    prop = make_property(agent)
    task = make_task(prop)
    elsewhere = make_property(other_agent)

    response = client.put(
        f"/api/tasks/agent/{task.id}",
        json={"isCompleted": True, "property": elsewhere.id, "assignedTo": other_agent.id},
        headers=auth(agent),
    )

    assert response.status_code == 200
    body = response.json()["task"]
    assert body["isCompleted"] is True
    assert body["property"]["id"] == prop.id
    assert body["assignedTo"]["id"] == agent.id


def test_agent_lists_and_deletes(client, agent, other_agent, auth, make_property, make_task):
    prop = make_property(agent)
    task = make_task(prop)
    make_task(make_property(other_agent))

    assert client.get("/api/tasks/agent", headers=auth(agent)).json()["total"] == 1
    assert client.get(f"/api/tasks/property/{prop.id}", headers=auth(agent)).json()["total"] == 1
    assert client.get(f"/api/tasks/property/{prop.id}", headers=auth(other_agent)).status_code == 404
    assert client.delete(f"/api/tasks/agent/{task.id}", headers=auth(other_agent)).status_code == 404
    assert client.delete(f"/api/tasks/agent/{task.id}", headers=auth(agent)).status_code == 204


def test_admin_creation_assigns_owner(client, admin, agent, auth, make_property):
    prop = make_property(agent)

    response = client.post("/api/tasks/admin", json=_new_task(prop.id, assignedTo=admin.id), headers=auth(admin))

    assert response.status_code == 201
    assert response.json()["task"]["assignedTo"]["id"] == agent.id


def test_admin_moves_task_to_other_owner(client, admin, agent, other_agent, auth, make_property, make_task):
    task = make_task(make_property(agent))
    target = make_property(other_agent)

    response = client.put(f"/api/tasks/admin/{task.id}", json={"property": target.id}, headers=auth(admin))

    assert response.status_code == 200
    assert response.json()["task"]["assignedTo"]["id"] == other_agent.id
    assert client.get(f"/api/tasks/agent/{task.id}", headers=auth(agent)).status_code == 404


def test_admin_move_to_missing_property(client, admin, agent, auth, make_property, make_task):
    prop = make_property(agent)
    task = make_task(prop)

    response = client.put(f"/api/tasks/admin/{task.id}", json={"property": 9999, "title": "Nope"}, headers=auth(admin))

    assert response.status_code == 404
    unchanged = client.get(f"/api/tasks/admin/{task.id}", headers=auth(admin)).json()
    assert unchanged["title"] == task.title
    assert unchanged["property"]["id"] == prop.id


def test_admin_reads_everything(client, admin, agent, other_agent, auth, make_property, make_task):
    prop = make_property(agent)
    make_task(prop)
    make_task(make_property(other_agent))

    assert client.get("/api/tasks/admin", headers=auth(admin)).json()["total"] == 2
    assert client.get(f"/api/tasks/admin/property/{prop.id}", headers=auth(admin)).json()["total"] == 1
    assert client.get("/api/tasks/admin/property/9999", headers=auth(admin)).status_code == 404


def test_owner_reassignment_scenario(client, admin, agent, other_agent, auth, make_property):
    """Reassign a property from A to B, then a new admin task on it goes to B."""
    prop = make_property(agent)
    client.put(f"/api/properties/admin/{prop.id}", json={"owner": other_agent.id}, headers=auth(admin))

    response = client.post("/api/tasks/admin", json=_new_task(prop.id), headers=auth(admin))

    assert response.json()["task"]["assignedTo"]["id"] == other_agent.id


def test_agent_routes_reject_admin_and_anonymous(client, admin, auth):
    assert client.get("/api/tasks/agent", headers=auth(admin)).status_code == 403
    assert client.get("/api/tasks/agent").status_code == 401
    assert client.get("/api/tasks/admin/abc", headers=auth(admin)).status_code == 400


def test_oversized_ids_are_rejected(client, agent, admin, auth, make_property, make_task):
    huge = 2**70
    task = make_task(make_property(agent))

    path_responses = [
        client.get(f"/api/tasks/agent/{huge}", headers=auth(agent)),
        client.put(f"/api/tasks/agent/{huge}", json={"title": "x"}, headers=auth(agent)),
        client.delete(f"/api/tasks/agent/{huge}", headers=auth(agent)),
        client.get(f"/api/tasks/property/{huge}", headers=auth(agent)),
        client.get(f"/api/tasks/admin/{huge}", headers=auth(admin)),
        client.get(f"/api/tasks/admin/property/{huge}", headers=auth(admin)),
        client.delete(f"/api/tasks/admin/{huge}", headers=auth(admin)),
    ]
    body_responses = [
        client.post("/api/tasks/agent", json=_new_task(huge), headers=auth(agent)),
        client.post("/api/tasks/admin", json=_new_task(huge), headers=auth(admin)),
        client.put(f"/api/tasks/admin/{task.id}", json={"property": huge}, headers=auth(admin)),
    ]

    assert all(r.status_code == 400 for r in path_responses + body_responses)
    assert all(r.json()["detail"] == "Invalid identifier format" for r in path_responses)
