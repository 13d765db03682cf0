"""
KolayPanel - Blog ve Landing Sayfasi Testleri
"""

from datetime import datetime, timedelta, timezone

from kolaypanel.services.blog import resolve_status, slugify

BLOGS_URL = "/api/v1/blogs"
LANDING_URL = "/api/v1/landing"


class TestBlogHelpers:

    def test_slugify(self):
        assert slugify("Yeni Urunler 2026!") == "yeni-urunler-2026"
        assert slugify("  --Merhaba,  Dunya--  ") == "merhaba-dunya"

    def test_resolve_status(self):
        now = datetime(2026, 6, 1, tzinfo=timezone.utc)
        future = now + timedelta(days=3)
        assert resolve_status("draft", "setDate", future, now) == "draft"
        assert resolve_status("publish", "setDate", future, now) == "scheduled"
        assert resolve_status("publish", "setDate", now - timedelta(days=1), now) == "published"
        assert resolve_status("publish", "automatic", None, now) == "published"


class TestBlogAPI:

    def test_create_published(self, client, auth_headers):
        response = client.post(
            BLOGS_URL,
            json={"title": "Fatura Ipuclari", "content": "Icerik", "tags": "fatura, vergi ,", "locations": ["Istanbul "]},
            headers=auth_headers,
        )
        assert response.status_code == 201, response.text
        blog = response.json()
        assert blog["slug"] == "fatura-ipuclari"
        assert blog["status"] == "published"
        assert blog["tags"] == ["fatura", "vergi"]
        assert blog["locations"] == ["Istanbul"]
        assert blog["author"]["email"] == "test@kolaypanel.com"
        assert blog["author"]["name"] == "Test Kullanici"
        assert blog["views"] == 0

    def test_scheduled_and_filter(self, client, auth_headers):
        future = (datetime.now(timezone.utc) + timedelta(days=7)).isoformat()
        client.post(
            BLOGS_URL,
            json={"title": "Gelecek", "content": "x", "publish_type": "setDate", "publish_date": future},
            headers=auth_headers,
        )
        client.post(BLOGS_URL, json={"title": "Taslak", "content": "x", "action": "draft"}, headers=auth_headers)

        scheduled = client.get(BLOGS_URL, params={"status": "scheduled"}, headers=auth_headers).json()
        assert [b["title"] for b in scheduled] == ["Gelecek"]
        assert scheduled[0]["scheduled_publish"] is True

        drafts = client.get(BLOGS_URL, params={"status": "draft"}, headers=auth_headers).json()
        assert [b["title"] for b in drafts] == ["Taslak"]

    def test_update_title_and_publish(self, client, auth_headers):
        blog = client.post(
            BLOGS_URL, json={"title": "Eski", "content": "x", "action": "draft"}, headers=auth_headers
        ).json()
        response = client.put(
            f"{BLOGS_URL}/{blog['id']}", json={"title": "Yeni Baslik", "action": "publish"}, headers=auth_headers
        )
        assert response.status_code == 200, response.text
        updated = response.json()
        assert updated["slug"] == "yeni-baslik"
        assert updated["status"] == "published"
        assert updated["author"]["name"] == "Test Kullanici"

    def test_record_view(self, client, auth_headers):
        blog = client.post(BLOGS_URL, json={"title": "Okunan", "content": "x"}, headers=auth_headers).json()
        client.post(f"{BLOGS_URL}/{blog['id']}/view", headers=auth_headers)
        response = client.post(f"{BLOGS_URL}/{blog['id']}/view", headers=auth_headers)
        assert response.json()["views"] == 2

    def test_delete(self, client, auth_headers):
        blog = client.post(BLOGS_URL, json={"title": "Silinecek", "content": "x"}, headers=auth_headers).json()
        assert client.delete(f"{BLOGS_URL}/{blog['id']}", headers=auth_headers).status_code == 204
        assert client.get(f"{BLOGS_URL}/{blog['id']}", headers=auth_headers).status_code == 404


class TestLandingAPI:

    def test_empty_landing(self, client, auth_headers):
        data = client.get(LANDING_URL, headers=auth_headers).json()
        assert data["hero"] is None
        assert data["features"] == []

    def test_hero_upsert(self, client, auth_headers, store):
        client.put(f"{LANDING_URL}/hero", json={"title": "Ilk"}, headers=auth_headers)
        client.put(f"{LANDING_URL}/hero", json={"title": "Ikinci"}, headers=auth_headers)
        assert store.count_documents("hero") == 1
        assert client.get(LANDING_URL, headers=auth_headers).json()["hero"]["title"] == "Ikinci"

    def test_feature_limit(self, client, auth_headers):
        for i in range(6):
            response = client.post(f"{LANDING_URL}/features", json={"title": f"Ozellik {i}"}, headers=auth_headers)
            assert response.status_code == 201
        response = client.post(f"{LANDING_URL}/features", json={"title": "Yedinci"}, headers=auth_headers)
        assert response.status_code == 400
        assert len(client.get(LANDING_URL, headers=auth_headers).json()["features"]) == 6

    def test_testimonial_rating_range(self, client, auth_headers):
        bad = client.post(f"{LANDING_URL}/testimonials", json={"title": "X", "rating": 6}, headers=auth_headers)
        assert bad.status_code == 422

        created = client.post(
            f"{LANDING_URL}/testimonials", json={"title": "Harika", "rating": 4}, headers=auth_headers
        ).json()
        updated = client.put(
            f"{LANDING_URL}/testimonials/{created['id']}", json={"rating": 5}, headers=auth_headers
        ).json()
        assert updated["rating"] == 5
        assert updated["title"] == "Harika"

    def test_delete_feature(self, client, auth_headers):
        feature = client.post(f"{LANDING_URL}/features", json={"title": "A"}, headers=auth_headers).json()
        assert client.delete(f"{LANDING_URL}/features/{feature['id']}", headers=auth_headers).status_code == 204
        assert client.delete(f"{LANDING_URL}/features/{feature['id']}", headers=auth_headers).status_code == 404
