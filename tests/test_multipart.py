import shutil
import pytest
from wallet_core.errors import LocalFileError, LocalFileNotFoundError, PreconditionError
from wallet_core.multipart import MultipartWriter, encode_file_upload


def test_upload_body_layout(tmp_path):
    doc = tmp_path / "doc.txt"
    doc.write_bytes(b"hello")

    body, content_type = encode_file_upload(
        [("poe_id", "poe-1"), ("read_only", "true")], "poe_file", str(doc), boundary="testboundary"
    )

    assert content_type == "multipart/form-data; boundary=testboundary"
    assert body == (
        b'--testboundary\r\n'
        b'Content-Disposition: form-data; name="poe_id"\r\n\r\n'
        b'poe-1\r\n'
        b'--testboundary\r\n'
        b'Content-Disposition: form-data; name="read_only"\r\n\r\n'
        b'true\r\n'
        b'--testboundary\r\n'
        b'Content-Disposition: form-data; name="poe_file"; filename="doc.txt"\r\n'
        b'Content-Type: application/octet-stream\r\n\r\n'
        b'hello\r\n'
        b'--testboundary--\r\n'
    )


def test_unfinalized_body_is_refused():
    w = MultipartWriter("b")
    w.write_field("poe_id", "poe-1")
    with pytest.raises(PreconditionError):
        w.getvalue()

    w.close()
    w.close()
    assert w.getvalue().endswith(b"\r\n--b--\r\n")
    with pytest.raises(PreconditionError):
        w.write_field("late", "x")


def test_quotes_in_names_are_escaped():
    w = MultipartWriter("b")
    w.create_form_file("poe_file", 'we"ird.txt').write(b"x")
    w.close()
    assert b'filename="we\\"ird.txt"' in w.getvalue()


def test_missing_file(tmp_path):
    missing = tmp_path / "nope.bin"
    with pytest.raises(LocalFileNotFoundError) as e:
        encode_file_upload([("poe_id", "poe-1")], "poe_file", str(missing))
    assert e.value.path == str(missing)


def test_file_is_closed_when_copy_fails(tmp_path, monkeypatch):
    doc = tmp_path / "doc.txt"
    doc.write_bytes(b"hello")
    opened = []

    def broken_copy(src, dst, length=0):
        opened.append(src)
        raise OSError("read error")

    monkeypatch.setattr(shutil, "copyfileobj", broken_copy)

    with pytest.raises(LocalFileError) as e:
        encode_file_upload([("poe_id", "poe-1")], "poe_file", str(doc))

    assert not isinstance(e.value, LocalFileNotFoundError)
    assert opened and opened[0].closed
