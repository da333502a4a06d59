"""
Tests for the HTML views.
"""


class TestPages:
    def test_home(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert "<h1>Mahasiswa</h1>" in response.text

    def test_about(self, client):
        response = client.get("/about")

        assert response.status_code == 200
        assert "<h1>About</h1>" in response.text

    def test_unknown_path_uses_error_envelope(self, client):
        response = client.get("/nowhere")

        assert response.status_code == 404
        assert response.json()["status"] == "error"
