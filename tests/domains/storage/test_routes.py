"""Tests for the /api/storage routes."""

from http import HTTPStatus
from unittest.mock import MagicMock

import pytest
from starlette.testclient import TestClient

from virtui.domains.storage.crds import StorageCRDs
from virtui.domains.storage.routes import register_routes
from virtui.server import VirtUIServer
from virtui.utils.errors import ClusterRequestError


@pytest.fixture
def api(api_factory) -> TestClient:
    """TestClient serving the storage routes."""
    return api_factory(register_routes)


class TestDataVolumeRoutes:
    """Test /api/storage/datavolumes."""

    def test_list(self, api: TestClient, mock_k8s: MagicMock) -> None:
        """GET lists DataVolumes in the requested namespace."""
        mock_k8s.list_resources.return_value = []

        response = api.get("/api/storage/datavolumes", params={"namespace": "lab"})

        assert response.status_code == HTTPStatus.OK
        assert response.json() == []
        mock_k8s.list_resources.assert_called_once_with(StorageCRDs.DATA_VOLUME, namespace="lab")

    def test_list_failure(self, api: TestClient, mock_k8s: MagicMock) -> None:
        """A failed list is a 500."""
        mock_k8s.list_resources.side_effect = ClusterRequestError("list", "DataVolume", status=403)

        response = api.get("/api/storage/datavolumes")

        assert response.status_code == HTTPStatus.INTERNAL_SERVER_ERROR
        assert response.json() == {"error": "Failed to list DataVolumes"}

    def test_create_blank(self, api: TestClient, mock_k8s: MagicMock) -> None:
        """POST creates a blank DataVolume."""
        mock_k8s.create.return_value = {"metadata": {"name": "scratch"}}

        response = api.post(
            "/api/storage/datavolumes", json={"name": "scratch", "sourceType": "blank"}
        )

        assert response.status_code == HTTPStatus.CREATED
        body = mock_k8s.create.call_args.kwargs["body"]
        assert body["spec"]["source"] == {"blank": {}}

    def test_create_http_without_url(self, api: TestClient, mock_k8s: MagicMock) -> None:
        """An http source without a URL is a 400 and nothing is created."""
        response = api.post("/api/storage/datavolumes", json={"name": "x", "sourceType": "http"})

        assert response.status_code == HTTPStatus.BAD_REQUEST
        mock_k8s.create.assert_not_called()

    def test_delete(self, api: TestClient, mock_k8s: MagicMock) -> None:
        """DELETE acknowledges with success."""
        response = api.delete("/api/storage/datavolumes/dv1")

        assert response.json() == {"success": True}
        mock_k8s.delete.assert_called_once_with(StorageCRDs.DATA_VOLUME, "dv1", namespace="default")


class TestSnapshotRoutes:
    """Test /api/storage/snapshots."""

    def test_create(self, api: TestClient, mock_k8s: MagicMock) -> None:
        """POST creates a snapshot of the named PVC."""
        mock_k8s.create.return_value = {"metadata": {"name": "s1"}}

        response = api.post("/api/storage/snapshots", json={"name": "s1", "sourcePvc": "data"})

        assert response.status_code == HTTPStatus.CREATED
        assert mock_k8s.create.call_args.args[0] == StorageCRDs.VOLUME_SNAPSHOT

    def test_delete_failure(self, api: TestClient, mock_k8s: MagicMock) -> None:
        """A failed delete is a 500 naming the resource type."""
        mock_k8s.delete.side_effect = ClusterRequestError("delete", "VolumeSnapshot", status=404)

        response = api.delete("/api/storage/snapshots/s1")

        assert response.status_code == HTTPStatus.INTERNAL_SERVER_ERROR
        assert response.json() == {"error": "Failed to delete VolumeSnapshot"}


class TestFilesystemRoutes:
    """Test /api/storage/filesystems."""

    def test_list(self, api: TestClient, mock_k8s: MagicMock) -> None:
        """GET lists PVCs."""
        mock_k8s.list_resources.return_value = [
            {"metadata": {"name": "data", "namespace": "default"}, "status": {"phase": "Bound"}}
        ]

        response = api.get("/api/storage/filesystems")

        assert response.status_code == HTTPStatus.OK
        assert response.json()[0]["status"] == "Bound"

    def test_create_failure(self, api: TestClient, mock_k8s: MagicMock) -> None:
        """A rejected PVC create is a 500."""
        mock_k8s.create.side_effect = ClusterRequestError("create", "PersistentVolumeClaim")

        response = api.post("/api/storage/filesystems", json={"name": "data"})

        assert response.status_code == HTTPStatus.INTERNAL_SERVER_ERROR
        assert response.json() == {"error": "Failed to create PVC"}

    def test_read_only(
        self, api: TestClient, read_only: VirtUIServer, mock_k8s: MagicMock
    ) -> None:
        """Read-only mode rejects storage writes."""
        response = api.post("/api/storage/filesystems", json={"name": "data"})

        assert response.status_code == HTTPStatus.FORBIDDEN
        assert "read-only" in response.json()["error"]
        mock_k8s.create.assert_not_called()
