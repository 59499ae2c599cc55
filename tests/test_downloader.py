"""Tests for media downloads."""

from unittest.mock import MagicMock, PropertyMock

from site_crawler.downloader import DownloadManager
from site_crawler.models import ErrorKind


def make_response(status=200, content=b"\x89PNG"):
    response = MagicMock()
    response.status_code = status
    response.content = content
    return response


def make_downloader(config, response=None, error=None):
    session = MagicMock()
    if error is not None:
        session.get.side_effect = error
    else:
        session.get.return_value = response
    return DownloadManager(config, session=session), session


def test_file_written_into_domain_folder(config, tmp_path):
    downloader, session = make_downloader(config, make_response())
    target = tmp_path / "out" / "site.test" / "logo.png"

    assert downloader.download_file("https://site.test/img/logo.png", target) is None

    assert target.read_bytes() == b"\x89PNG"
    headers = session.get.call_args.kwargs['headers']
    assert headers['User-Agent'] in config.scraper_config.user_agents


def test_non_success_status_is_returned(config, tmp_path):
    downloader, _ = make_downloader(config, make_response(status=404))
    target = tmp_path / "missing.png"

    error = downloader.download_file("https://site.test/missing.png", target)

    assert error.kind == ErrorKind.HTTP
    assert error.status_code == 404
    assert not target.exists()


def test_transport_error_is_returned(config, tmp_path):
    downloader, session = make_downloader(config, error=ConnectionError("reset by peer"))

    error = downloader.download_file("https://site.test/a.mp4", tmp_path / "a.mp4")

    assert error.kind == ErrorKind.NETWORK
    assert "reset by peer" in error.message
    assert session.get.call_count == 1


def test_body_read_error_is_returned(config, tmp_path):
    response = MagicMock()
    response.status_code = 200
    type(response).content = PropertyMock(side_effect=IOError("truncated"))
    downloader, _ = make_downloader(config, response)

    error = downloader.download_file("https://site.test/a.png", tmp_path / "a.png")

    assert error.kind == ErrorKind.BODY_READ


def test_unwritable_target_is_a_sink_error(config, tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")
    downloader, _ = make_downloader(config, make_response())

    error = downloader.download_file("https://site.test/a.png", blocker / "a.png")

    assert error.kind == ErrorKind.SINK


def test_filename_for():
    assert DownloadManager.filename_for("https://site.test/img/logo.png", "media.bin") == "logo.png"
    assert DownloadManager.filename_for("https://site.test/files/my%20clip.mp4?x=1", "media.bin") == "my clip.mp4"
    assert DownloadManager.filename_for("https://site.test/", "media.bin") == "media.bin"
    assert DownloadManager.filename_for("https://site.test", "script.js") == "script.js"


def test_close_closes_session(config):
    downloader, session = make_downloader(config, make_response())
    downloader.close()
    session.close.assert_called_once()
