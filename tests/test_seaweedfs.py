import json
from datetime import timedelta

import pytest
import requests
import responses

from commonkit.seaweedfs import SeaweedFS

MASTER = "http://localhost:9333"
ASSIGN = {"fid": "3,0428f566d1", "url": "localhost:8080", "publicUrl": "localhost:8080", "count": 1}
SVG = b"<svg xmlns='http://www.w3.org/2000/svg'></svg>"


def test_default_timeout():
    assert SeaweedFS(MASTER, 0).http_timeout == 30.0


def test_timedelta_timeout():
    assert SeaweedFS(MASTER, timedelta(seconds=10)).http_timeout == 10.0


def test_full_object_flow(tmp_path):
    source = tmp_path / "test.svg"
    source.write_bytes(SVG)
    fs = SeaweedFS(MASTER, timedelta(seconds=10))

    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, f"{MASTER}/dir/assign", json=ASSIGN)
        object_url = f"http://{ASSIGN['url']}/{ASSIGN['fid']}"
        rsps.add(responses.POST, object_url, json={"name": "test.svg", "size": len(SVG), "eTag": "abc"})
        rsps.add(responses.GET, object_url, body=SVG)
        rsps.add(responses.DELETE, object_url, status=202)

        assign = json.loads(fs.get_assign(f"{MASTER}/dir/assign"))
        assert assign["fid"] == ASSIGN["fid"]

        put = json.loads(fs.put_object(f"http://{assign['url']}/{assign['fid']}", str(source)))
        assert put["name"] == "test.svg"
        assert put["size"] == len(SVG)

        assert fs.get_object(object_url) == SVG
        assert fs.remove_object(object_url) is None

        methods = [call.request.method for call in rsps.calls]
        assert methods == ["GET", "POST", "GET", "DELETE"]


def test_put_object_sends_multipart(tmp_path):
    source = tmp_path / "test.svg"
    source.write_bytes(SVG)
    fs = SeaweedFS(MASTER)
    with responses.RequestsMock() as rsps:
        rsps.add(responses.POST, "http://localhost:8080/3,01", body=b"{}")
        fs.put_object("http://localhost:8080/3,01", source)
        request = rsps.calls[0].request
        assert request.headers["Content-Type"].startswith("multipart/form-data")
        assert b'name="file"; filename="test.svg"' in request.body
        assert SVG in request.body


def test_put_object_missing_file(tmp_path):
    fs = SeaweedFS(MASTER)
    with pytest.raises(FileNotFoundError):
        fs.put_object("http://localhost:8080/3,01", tmp_path / "missing.svg")


def test_get_object_returns_body_on_error_status():
    fs = SeaweedFS(MASTER)
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, "http://localhost:8080/9,99", status=404, body=b"not found")
        assert fs.get_object("http://localhost:8080/9,99") == b"not found"


def test_get_object_connection_error():
    fs = SeaweedFS(MASTER)
    with responses.RequestsMock():
        with pytest.raises(requests.ConnectionError):
            fs.get_object("http://localhost:8080/unknown")