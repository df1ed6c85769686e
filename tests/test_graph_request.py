from io import BytesIO

import pytest

from graph_catalog import CATALOG, get_endpoint
from graph_errors import MissingCredentialError, MissingParameterError, UnknownOperationError
from graph_request import (
    CallContext, Endpoint, Param, Source, build_request, request_from_url,
)


def _required_args(endpoint):
    args = {}
    for p in endpoint.params:
        if p.required:
            args[p.name] = b"\xff\xd8data" if p.binary else f"v-{p.name}"
    return args


@pytest.mark.parametrize("name", sorted(CATALOG))
def test_every_endpoint_builds_with_required_arguments(name):
    endpoint = CATALOG[name]
    req = build_request(endpoint, CallContext("TOKEN", _required_args(endpoint)))

    assert req.method == endpoint.method
    assert "{" not in req.path
    if endpoint.auth:
        sent = dict(req.query) if endpoint.token_in is Source.QUERY else dict(req.form)
        assert sent["access_token"] == "TOKEN"


def test_search_posts_renders_defaults_in_declared_order():
    req = build_request(get_endpoint("search_posts"), CallContext(None, {"q": "concert"}))

    assert req.path == "search"
    assert req.query_string() == "q=concert&since=last+week&until=yesterday&limit=3&offset=2"


def test_supplied_values_override_defaults():
    req = build_request(
        get_endpoint("get_album_photos"),
        CallContext(None, {"album": "99", "since": "2012-01-01", "limit": 50}),
    )

    assert req.path == "99/photos"
    assert req.query == (
        ("since", "2012-01-01"), ("until", "yesterday"), ("limit", "50"), ("offset", "2"),
    )


def test_search_users_sends_token_first_and_fixed_type_last():
    req = build_request(get_endpoint("search_users"), CallContext("TOKEN", {"q": "ann"}))

    assert req.query[0] == ("access_token", "TOKEN")
    assert req.query[-1] == ("type", "user")


def test_get_user_sends_metadata_default():
    req = build_request(get_endpoint("get_user"), CallContext(None, {"user": "123"}))

    assert req.path == "123"
    assert req.query == (("metadata", "0"),)
    assert req.form is None


def test_missing_path_parameter_fails_before_any_request():
    with pytest.raises(MissingParameterError) as exc:
        build_request(get_endpoint("get_user"), CallContext(None, {}))
    assert exc.value.parameter == "user"

    with pytest.raises(MissingParameterError):
        build_request(get_endpoint("get_user"), CallContext(None, {"user": ""}))


def test_missing_required_query_parameter():
    with pytest.raises(MissingParameterError) as exc:
        build_request(get_endpoint("search_posts"), CallContext(None, {}))
    assert exc.value.parameter == "q"


def test_missing_token_is_a_credential_error():
    with pytest.raises(MissingCredentialError):
        build_request(get_endpoint("get_user_wall"), CallContext(None, {"user": "me"}))


def test_path_values_are_quoted_as_one_segment():
    req = build_request(get_endpoint("get_post"), CallContext(None, {"post": "12/../me"}))
    assert req.path == "12%2F..%2Fme"


def test_publish_message_form_only_has_token_and_message():
    req = build_request(
        get_endpoint("publish_message"),
        CallContext("TOKEN", {"profile_id": "me", "msg": "hola"}),
    )

    assert req.method == "POST"
    assert req.path == "me/feed"
    assert req.query == ()
    assert req.form == (("access_token", "TOKEN"), ("message", "hola"))
    assert req.content_type == "application/x-www-form-urlencoded"


def test_publish_message_includes_optional_fields_when_given():
    req = build_request(
        get_endpoint("publish_message"),
        CallContext("TOKEN", {"profile_id": "me", "msg": "hola", "link": "http://x.org"}),
    )
    assert dict(req.form) == {"access_token": "TOKEN", "message": "hola", "link": "http://x.org"}


def test_publish_note_keeps_token_in_query():
    req = build_request(
        get_endpoint("publish_note"),
        CallContext("TOKEN", {"profile_id": "me", "msg": "cuerpo", "subject": "título"}),
    )
    assert req.query == (("access_token", "TOKEN"),)
    assert req.form == (("message", "cuerpo"), ("subject", "título"))


def test_publish_photo_builds_multipart(tmp_path):
    photo = tmp_path / "foto.jpg"
    photo.write_bytes(b"\xff\xd8jpeg")

    req = build_request(
        get_endpoint("publish_photo"),
        CallContext("TOKEN", {"album_id": "42", "caption": "playa", "photo": photo}),
    )

    assert req.path == "42/photos"
    assert req.form == (("message", "playa"),)
    assert req.files == (("source", ("foto.jpg", b"\xff\xd8jpeg")),)
    assert req.content_type == "multipart/form-data"


def test_publish_photo_accepts_file_objects():
    req = build_request(
        get_endpoint("publish_photo"),
        CallContext("TOKEN", {"album_id": "42", "caption": "c", "photo": BytesIO(b"abc")}),
    )
    assert req.files[0][1][1] == b"abc"


def test_unknown_argument_is_a_type_error():
    with pytest.raises(TypeError):
        build_request(get_endpoint("get_user"), CallContext(None, {"user": "1", "colour": "red"}))


def test_unknown_operation():
    with pytest.raises(UnknownOperationError):
        get_endpoint("get_horoscope")


def test_endpoint_rejects_placeholder_without_path_param():
    with pytest.raises(ValueError):
        Endpoint("broken", "{user}/feed", params=(Param("page", Source.PATH),))

    with pytest.raises(ValueError):
        Endpoint("broken", "{user}/feed")


def test_dislike_and_delete_use_delete_verb():
    assert get_endpoint("dislike").method == "DELETE"
    assert get_endpoint("delete_object").method == "DELETE"
    assert get_endpoint("like").method == "POST"


def test_url_joins_base_path_and_query():
    req = build_request(get_endpoint("get_user_picture"), CallContext(None, {"user": "4"}))
    assert req.url("https://graph.facebook.com/") == "https://graph.facebook.com/4/picture?type=small"


def test_request_from_next_url():
    req = request_from_url("https://graph.facebook.com/me/feed?access_token=T&limit=25&until=1300000000")

    assert req.method == "GET"
    assert req.path == "me/feed"
    assert req.query == (("access_token", "T"), ("limit", "25"), ("until", "1300000000"))


def test_next_url_keeps_its_own_origin():
    req = request_from_url("https://graph.facebook.com/v19.0/me/feed?after=abc")

    assert req.endpoint_url("https://otro.example.test/v2.0") == "https://graph.facebook.com/v19.0/me/feed"
    assert req.url("https://otro.example.test") == "https://graph.facebook.com/v19.0/me/feed?after=abc"
