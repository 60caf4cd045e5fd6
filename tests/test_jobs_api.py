"""
Integration tests for the /jobs endpoints.
"""


def _create_job(client, headers, company="Acme", description="Backend role", link=None):
    payload = {"company_name": company, "description": description}
    if link:
        payload["application_link"] = link
    response = client.post("/jobs", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


def test_jobs_require_auth(client):
    assert client.get("/jobs").status_code == 401


def test_create_job(client, auth_headers, test_user):
    data = _create_job(client, auth_headers, link="https://example.com/careers/1")

    assert data["company_name"] == "Acme"
    assert data["description"] == "Backend role"
    assert data["application_link"] == "https://example.com/careers/1"
    assert data["user_id"] == test_user.id


def test_create_job_validation(client, auth_headers):
    response = client.post("/jobs", json={"company_name": "", "description": "x"}, headers=auth_headers)
    assert response.status_code == 422

    response = client.post("/jobs", json={"company_name": "Acme"}, headers=auth_headers)
    assert response.status_code == 422


def test_list_jobs_with_search(client, auth_headers):
    _create_job(client, auth_headers, company="Acme", description="Python services")
    _create_job(client, auth_headers, company="Globex", description="Frontend work")
    _create_job(client, auth_headers, company="Initech", description="More python")

    response = client.get("/jobs", headers=auth_headers)
    data = response.json()
    assert data["total"] == 3
    assert [j["company_name"] for j in data["jobs"]] == ["Initech", "Globex", "Acme"]

    response = client.get("/jobs", params={"search": "PYTHON"}, headers=auth_headers)
    data = response.json()
    assert data["total"] == 2
    assert {j["company_name"] for j in data["jobs"]} == {"Acme", "Initech"}

    response = client.get("/jobs", params={"search": "globex", "limit": 1}, headers=auth_headers)
    assert response.json()["count"] == 1


def test_update_job(client, auth_headers):
    job = _create_job(client, auth_headers)

    response = client.put(
        f"/jobs/{job['id']}",
        json={"company_name": "Acme Corp", "description": "Staff backend role"},
        headers=auth_headers
    )

    assert response.status_code == 200
    assert response.json()["company_name"] == "Acme Corp"
    assert response.json()["application_link"] is None


def test_delete_job(client, auth_headers):
    job = _create_job(client, auth_headers)

    assert client.delete(f"/jobs/{job['id']}", headers=auth_headers).status_code == 204
    assert client.get(f"/jobs/{job['id']}", headers=auth_headers).status_code == 404


def test_job_of_other_user_is_not_found(client, auth_headers, other_headers):
    job = _create_job(client, auth_headers)

    assert client.get(f"/jobs/{job['id']}", headers=other_headers).status_code == 404
    assert client.delete(f"/jobs/{job['id']}", headers=other_headers).status_code == 404
    assert client.get("/jobs", headers=other_headers).json()["total"] == 0
