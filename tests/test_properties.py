import pytest

from openvidu_session.core.enums import MediaMode, OpenViduRole, RecordingLayout, RecordingMode
from openvidu_session.core.properties import (
    DEFAULT_CUSTOM_LAYOUT,
    DEFAULT_CUSTOM_SESSION_ID,
    DEFAULT_MEDIA_MODE,
    DEFAULT_RECORDING_LAYOUT,
    DEFAULT_RECORDING_MODE,
    DEFAULT_ROLE,
    DEFAULT_TOKEN_DATA,
    SessionProperties,
    TokenOptions,
    build_session_request,
    build_token_request,
)


def test_defaults_have_documented_values():
    assert DEFAULT_MEDIA_MODE == "ROUTED"
    assert DEFAULT_RECORDING_MODE == "MANUAL"
    assert DEFAULT_RECORDING_LAYOUT == "BEST_FIT"
    assert DEFAULT_CUSTOM_LAYOUT == ""
    assert DEFAULT_CUSTOM_SESSION_ID == ""
    assert DEFAULT_ROLE == "PUBLISHER"
    assert DEFAULT_TOKEN_DATA == ""


@pytest.mark.parametrize(
    "properties, key, expected",
    [
        (SessionProperties(media_mode="RELAYED"), "recordingMode", DEFAULT_RECORDING_MODE),
        (SessionProperties(recording_mode="ALWAYS"), "mediaMode", DEFAULT_MEDIA_MODE),
        (SessionProperties(custom_session_id="room42"), "defaultRecordingLayout", DEFAULT_RECORDING_LAYOUT),
        (SessionProperties(default_recording_layout="CUSTOM"), "defaultCustomLayout", DEFAULT_CUSTOM_LAYOUT),
        (SessionProperties(default_custom_layout="layouts/grid"), "customSessionId", DEFAULT_CUSTOM_SESSION_ID),
    ],
)
def test_omitted_fields_get_defaults(properties, key, expected):
    assert build_session_request(properties)[key] == expected


def test_supplied_fields_are_kept():
    properties = SessionProperties(
        media_mode=MediaMode.RELAYED,
        recording_mode=RecordingMode.ALWAYS,
        default_recording_layout=RecordingLayout.CUSTOM,
        default_custom_layout="layouts/grid",
        custom_session_id="room42",
    )

    assert build_session_request(properties) == {
        "mediaMode": "RELAYED",
        "recordingMode": "ALWAYS",
        "defaultRecordingLayout": "CUSTOM",
        "defaultCustomLayout": "layouts/grid",
        "customSessionId": "room42",
    }


def test_empty_strings_count_as_absent():
    body = build_session_request(SessionProperties(media_mode="", custom_session_id=""))
    assert body["mediaMode"] == DEFAULT_MEDIA_MODE
    assert body["customSessionId"] == DEFAULT_CUSTOM_SESSION_ID


def test_none_properties_is_all_defaults():
    assert build_session_request(None) == build_session_request(SessionProperties())


def test_properties_are_not_mutated():
    properties = SessionProperties()
    build_session_request(properties)
    assert properties == SessionProperties()


def test_token_request_defaults():
    assert build_token_request("ses_ABC") == {
        "session": "ses_ABC",
        "role": DEFAULT_ROLE,
        "data": DEFAULT_TOKEN_DATA,
    }


def test_token_request_with_enum_role():
    body = build_token_request("ses_ABC", TokenOptions(role=OpenViduRole.SUBSCRIBER, data="bob"))
    assert body == {"session": "ses_ABC", "role": "SUBSCRIBER", "data": "bob"}


def test_token_request_unbound_session():
    assert build_token_request(None)["session"] is None
