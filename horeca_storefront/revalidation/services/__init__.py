from .webhook import (  # noqa: F401
    InvalidPayloadError,
    UnknownEventError,
    WebhookConfigError,
    WebhookEvent,
    handle_event,
    parse_event,
    sign_payload,
    verify_signature,
)
