import pytest

from netkit import InvalidParametersError, MultipartField
from netkit._utils import MultipartEncoder


class TestMultipartEncoder:
    def test_encodes_fields_in_order(self):
        encoder = MultipartEncoder(boundary="XYZ")
        encoder.add_fields(
            [
                MultipartField(parameters={"name": "title"}, data=b"Quarterly"),
                MultipartField(
                    parameters={"name": "file", "filename": "q.png"},
                    data=b"\x89PNG\r\n",
                    mime_type="image/png",
                ),
            ]
        )

        assert encoder.encode() == (
            b"--XYZ\r\n"
            b'Content-Disposition: form-data; name="title"\r\n'
            b"\r\n"
            b"Quarterly\r\n"
            b"--XYZ\r\n"
            b'Content-Disposition: form-data; name="file"; filename="q.png"\r\n'
            b"Content-Type: image/png\r\n"
            b"\r\n"
            b"\x89PNG\r\n\r\n"
            b"--XYZ--\r\n"
        )

    def test_empty_body_is_closing_boundary(self):
        assert MultipartEncoder(boundary="XYZ").encode() == b"--XYZ--\r\n"

    def test_content_type(self):
        encoder = MultipartEncoder(boundary="XYZ")

        assert encoder.content_type == "multipart/form-data; boundary=XYZ"

    def test_generated_boundaries_are_unique(self):
        assert MultipartEncoder().boundary != MultipartEncoder().boundary

    def test_quotes_in_parameters_are_escaped(self):
        encoder = MultipartEncoder(boundary="XYZ")
        encoder.add_field(
            MultipartField(
                parameters={"name": "file", "filename": 'my "best" shot.png'},
                data=b"",
            )
        )

        assert (
            b'Content-Disposition: form-data; name="file"; '
            b'filename="my %22best%22 shot.png"\r\n'
        ) in encoder.encode()

    @pytest.mark.parametrize(
        "field",
        [
            MultipartField(parameters={"name": "a\r\nX-Injected: 1"}, data=b""),
            MultipartField(parameters={"na\nme": "a"}, data=b""),
            MultipartField(parameters={"name": "a"}, data=b"", mime_type="text/plain\r\n"),
        ],
    )
    def test_line_breaks_in_headers_are_rejected(self, field: MultipartField):
        encoder = MultipartEncoder(boundary="XYZ")

        with pytest.raises(InvalidParametersError):
            encoder.add_field(field)

        assert encoder.encode() == b"--XYZ--\r\n"
