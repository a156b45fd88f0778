"""
HTTP API tests through FastAPI's TestClient.

Verification points:
1. gallery CRUD and error bodies
2. art piece lifecycle and sorted views
3. raw image upload/download
"""

import base64
import threading
import time

from arthaus.core.config import settings
from arthaus.shared.database.connection import write_lock

API = "/api/v1"


def _create_gallery(client, title="Modern Art"):
    response = client.post(f"{API}/galleries/", json={"title": title})
    assert response.status_code == 201
    return response.json()


def _add_piece(client, gallery_id, **fields):
    body = {"title": "Untitled", "type": "collection", "price": 0}
    body.update(fields)
    response = client.post(f"{API}/galleries/{gallery_id}/art-pieces", json=body)
    assert response.status_code == 201, response.text
    return response.json()


# =============================================================================
# 1. Galleries
# =============================================================================


class TestGalleryRoutes:
    def test_root_and_health(self, client):
        assert client.get("/").json() == {"message": "Welcome to Arthaus"}
        assert client.get("/health").json()["status"] == "healthy"

    def test_create_and_list(self, client):
        first = _create_gallery(client, "Modern Art")
        second = _create_gallery(client, "Prints")

        listed = client.get(f"{API}/galleries/").json()

        assert [g["id"] for g in listed] == [first["id"], second["id"]]
        assert listed[0]["collected_count"] == 0
        assert listed[0]["tracked_count"] == 0

    def test_create_with_empty_title(self, client):
        response = client.post(f"{API}/galleries/", json={"title": ""})

        assert response.status_code == 422
        body = response.json()
        assert body["success"] is False
        assert body["data"]["code"] == "VALIDATION_ERROR"

    def test_rename(self, client):
        gallery = _create_gallery(client)

        response = client.put(f"{API}/galleries/{gallery['id']}", json={"title": "Contemporary"})

        assert response.status_code == 200
        assert response.json()["title"] == "Contemporary"

    def test_get_unknown(self, client):
        response = client.get(f"{API}/galleries/999")

        assert response.status_code == 404
        assert response.json()["data"] == {"code": "NOT_FOUND", "entity": "Gallery", "id": 999}

    def test_delete_cascades(self, client):
        gallery = _create_gallery(client)
        piece = _add_piece(client, gallery["id"], title="A")

        assert client.delete(f"{API}/galleries/{gallery['id']}").status_code == 204

        assert client.get(f"{API}/galleries/").json() == []
        assert client.get(f"{API}/art-pieces/{piece['id']}").status_code == 404

    def test_delete_unknown(self, client):
        _create_gallery(client)

        assert client.delete(f"{API}/galleries/4242").status_code == 404
        assert len(client.get(f"{API}/galleries/").json()) == 1


# =============================================================================
# 2. Art pieces
# =============================================================================


class TestArtPieceRoutes:
    def test_modern_art_scenario(self, client):
        gallery = _create_gallery(client)
        a = _add_piece(client, gallery["id"], title="A", price=100, date_acquired="2023-05-01")
        b = _add_piece(client, gallery["id"], title="B", price=200, date_acquired="2024-02-14")

        url = f"{API}/galleries/{gallery['id']}/art-pieces"
        newest = client.get(url, params={"type": "collection", "sort": "dateNewToOld"}).json()
        cheapest = client.get(url, params={"type": "collection", "sort": "priceLowToHigh"}).json()

        assert [p["id"] for p in newest] == [b["id"], a["id"]]
        assert [p["id"] for p in cheapest] == [a["id"], b["id"]]

    def test_default_view_is_collection_newest_first(self, client):
        gallery = _create_gallery(client)
        old = _add_piece(client, gallery["id"], title="Old", date_acquired="2020-01-01")
        new = _add_piece(client, gallery["id"], title="New", date_acquired="2021-01-01")
        _add_piece(client, gallery["id"], title="Wish", type="tracking")

        view = client.get(f"{API}/galleries/{gallery['id']}/art-pieces").json()

        assert [p["id"] for p in view] == [new["id"], old["id"]]

    def test_unknown_sort_option(self, client):
        gallery = _create_gallery(client)

        response = client.get(f"{API}/galleries/{gallery['id']}/art-pieces", params={"sort": "byColour"})

        assert response.status_code == 422

    def test_tracking_piece_has_no_date(self, client):
        gallery = _create_gallery(client)

        piece = _add_piece(client, gallery["id"], title="Wish", type="tracking", date_acquired="2024-01-01")

        assert piece["date_acquired"] is None
        refreshed = client.get(f"{API}/galleries/{gallery['id']}").json()
        assert refreshed["tracked_count"] == 1

    def test_negative_price(self, client):
        gallery = _create_gallery(client)

        response = client.post(
            f"{API}/galleries/{gallery['id']}/art-pieces",
            json={"title": "Cheap", "price": -1},
        )

        assert response.status_code == 422
        assert response.json()["data"]["field"] == "price"

    def test_patch_switch_to_tracking(self, client):
        gallery = _create_gallery(client)
        piece = _add_piece(client, gallery["id"], title="A", date_acquired="2023-05-01")

        response = client.patch(f"{API}/art-pieces/{piece['id']}", json={"type": "tracking"})

        assert response.status_code == 200
        assert response.json()["type"] == "tracking"
        assert response.json()["date_acquired"] is None

    def test_remove(self, client):
        gallery = _create_gallery(client)
        piece = _add_piece(client, gallery["id"])

        assert client.delete(f"{API}/art-pieces/{piece['id']}").status_code == 204
        assert client.delete(f"{API}/art-pieces/{piece['id']}").status_code == 404

    def test_position(self, client):
        gallery = _create_gallery(client)
        a = _add_piece(client, gallery["id"], title="A", price=1)
        b = _add_piece(client, gallery["id"], title="B", price=2)

        response = client.get(f"{API}/art-pieces/{a['id']}/position", params={"sort": "priceHighToLow"})

        assert response.json() == {
            "piece_id": a["id"],
            "index": 1,
            "total": 2,
            "previous_id": b["id"],
            "next_id": None,
        }

    def test_sort_options(self, client):
        options = client.get(f"{API}/art-pieces/sort-options").json()

        assert options[0] == {"value": "dateNewToOld", "label": "Newest acquisition"}
        assert len(options) == 4


# =============================================================================
# 3. Images
# =============================================================================


class TestImageRoutes:
    def test_upload_download_delete(self, client):
        gallery = _create_gallery(client)
        piece = _add_piece(client, gallery["id"])
        url = f"{API}/art-pieces/{piece['id']}/image"

        assert client.get(url).status_code == 404

        uploaded = client.put(url, content=b"\x89PNG-bytes", headers={"Content-Type": "image/png"})
        assert uploaded.status_code == 200
        assert uploaded.json()["has_image"] is True

        downloaded = client.get(url)
        assert downloaded.status_code == 200
        assert downloaded.content == b"\x89PNG-bytes"

        assert client.delete(url).json()["has_image"] is False

    def test_base64_image_on_create(self, client):
        gallery = _create_gallery(client)
        encoded = base64.b64encode(b"opaque").decode()

        piece = _add_piece(client, gallery["id"], image=encoded)

        assert piece["has_image"] is True
        assert client.get(f"{API}/art-pieces/{piece['id']}/image").content == b"opaque"

    def test_empty_upload(self, client):
        gallery = _create_gallery(client)
        piece = _add_piece(client, gallery["id"])

        response = client.put(f"{API}/art-pieces/{piece['id']}/image", content=b"")

        assert response.status_code == 422

    def test_upload_over_limit_is_rejected(self, client, monkeypatch):
        monkeypatch.setattr(settings, "max_image_bytes", 4)
        gallery = _create_gallery(client)
        piece = _add_piece(client, gallery["id"])
        url = f"{API}/art-pieces/{piece['id']}/image"

        declared = client.put(url, content=b"12345")
        chunked = client.put(url, content=iter([b"12", b"34", b"56"]))

        for response in (declared, chunked):
            assert response.status_code == 422
            assert response.json()["data"]["field"] == "image"
        assert client.get(url).status_code == 404

    def test_upload_at_limit_is_stored(self, client, monkeypatch):
        monkeypatch.setattr(settings, "max_image_bytes", 4)
        gallery = _create_gallery(client)
        piece = _add_piece(client, gallery["id"])

        response = client.put(f"{API}/art-pieces/{piece['id']}/image", content=b"1234")

        assert response.status_code == 200
        assert response.json()["has_image"] is True

    def test_upload_waiting_for_writer_does_not_block_other_routes(self, client):
        gallery = _create_gallery(client)
        piece = _add_piece(client, gallery["id"])
        results = {}

        def upload():
            results["upload"] = client.put(f"{API}/art-pieces/{piece['id']}/image", content=b"img")

        def root():
            started = time.monotonic()
            results["root"] = client.get("/")
            results["root_elapsed"] = time.monotonic() - started

        uploader = threading.Thread(target=upload)
        reader = threading.Thread(target=root)
        write_lock.acquire()
        try:
            uploader.start()
            time.sleep(0.3)  # upload is now waiting on the lock
            reader.start()
            reader.join(timeout=5)
            root_done = not reader.is_alive()
        finally:
            write_lock.release()
        uploader.join(timeout=10)
        reader.join(timeout=10)

        assert root_done
        assert results["root"].status_code == 200
        assert results["root_elapsed"] < 1.0
        assert results["upload"].status_code == 200
