"""Request helpers shared by API tests."""


def create_upload(client, headers, duration=30, **extra):
    body = {"title": "Curta", "format": "Movie", "genres": ["Drama"], "duration_minutes": duration, **extra}
    res = client.post("/api/creators/upload", json=body, headers=headers)
    assert res.status_code == 200, res.text
    return res.json()
