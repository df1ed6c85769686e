from urllib.parse import urlencode

import pytest
import requests

from graph_api import GraphTransport
from graph_errors import ConnectionRefused, Non2xxStatus, TransportError, TransportTimeout
from graph_request import GraphRequest


def test_execute_targets_configured_origin(session):
    session.reply('{"id":"1"}')
    transport = GraphTransport("https://graph.example.test/", timeout=5, session=session)

    raw = transport.execute(GraphRequest("GET", "me", query=(("access_token", "T"),)))

    assert raw.status_code == 200
    assert raw.text == '{"id":"1"}'
    assert session.last["url"] == "https://graph.example.test/me"
    assert urlencode(session.last["params"]) == "access_token=T"
    assert session.last["timeout"] == 5
    assert session.last["data"] is None


def test_form_body_is_sent_as_data(session):
    session.reply('{"id":"p1"}')
    transport = GraphTransport(session=session)

    transport.execute(GraphRequest("POST", "me/feed", form=(("access_token", "T"), ("message", "hola"))))

    assert session.last["method"] == "POST"
    assert session.last["params"] is None
    assert session.last["data"] == [("access_token", "T"), ("message", "hola")]


def test_non_2xx_keeps_status_and_body(session):
    body = '{"error":{"message":"Invalid OAuth","type":"OAuthException","code":190}}'
    session.reply(body, status_code=400)
    transport = GraphTransport(session=session)

    with pytest.raises(Non2xxStatus) as exc:
        transport.execute(GraphRequest("GET", "me"))

    err = exc.value
    assert err.status_code == 400
    assert err.body == body
    assert err.error_message == "Invalid OAuth"
    assert err.error_type == "OAuthException"
    assert err.error_code == 190
    assert isinstance(err, TransportError)
    assert TransportError.Non2xxStatus is Non2xxStatus


def test_non_2xx_without_json_body(session):
    session.reply("<html>Bad Gateway</html>", status_code=502)

    with pytest.raises(Non2xxStatus) as exc:
        GraphTransport(session=session).execute(GraphRequest("GET", "me"))

    assert exc.value.error is None
    assert exc.value.body == "<html>Bad Gateway</html>"


def test_timeout_is_categorized(session):
    session.fail(requests.Timeout("lento"))

    with pytest.raises(TransportTimeout):
        GraphTransport(session=session).execute(GraphRequest("GET", "me"))


def test_connection_error_is_categorized(session):
    session.fail(requests.ConnectionError("refused"))

    with pytest.raises(ConnectionRefused):
        GraphTransport(session=session).execute(GraphRequest("GET", "me"))


def test_no_retries_on_rate_limit(session):
    session.reply('{"error":{"message":"limit"}}', status_code=429)
    session.reply('{"id":"1"}')

    with pytest.raises(Non2xxStatus):
        GraphTransport(session=session).execute(GraphRequest("GET", "me"))
    assert len(session.calls) == 1


def test_external_session_is_not_closed(session):
    GraphTransport(session=session).close()
    assert session.closed is False
