"""WordGate SDK."""

from .client import WordGateClient
from .config import LogSection, WebhookSection, WordGateConfig, load_config
from .dispatcher import WebhookDispatcher
from .events import (
    EVENT_DATA_TYPES,
    OrderCancelledData,
    OrderPaidData,
    SubscriptionCreatedData,
    SubscriptionUpdatedData,
    WebhookEvent,
    WebhookEventType,
    decode_event,
)
from .exceptions import (
    APIError,
    APIErrorCodes,
    ConfigError,
    ConfigErrorCodes,
    DecodeError,
    VerificationError,
    WebhookError,
    WebhookErrorCodes,
    WordGateError,
)
from .http_client import HttpWordGateClient
from .logger import new_logger
from .models import (
    CreateOrderRequest,
    OrderCustomer,
    OrderDetail,
    OrderItem,
    OrderItemInfo,
    OrderResponse,
)
from .receiver import WebhookReceiver, WebhookResult
from .signature import (
    DEFAULT_MAX_AGE_SECONDS,
    SIGNATURE_HEADER,
    SignedHeader,
    build_header,
    sign,
    verify,
    verify_signature,
)

__all__ = [
    "sign",
    "build_header",
    "verify",
    "verify_signature",
    "SignedHeader",
    "SIGNATURE_HEADER",
    "DEFAULT_MAX_AGE_SECONDS",
    "WebhookEvent",
    "WebhookEventType",
    "EVENT_DATA_TYPES",
    "OrderPaidData",
    "OrderCancelledData",
    "SubscriptionCreatedData",
    "SubscriptionUpdatedData",
    "decode_event",
    "WebhookDispatcher",
    "WebhookReceiver",
    "WebhookResult",
    "WordGateClient",
    "HttpWordGateClient",
    "CreateOrderRequest",
    "OrderItem",
    "OrderCustomer",
    "OrderResponse",
    "OrderItemInfo",
    "OrderDetail",
    "WordGateConfig",
    "WebhookSection",
    "LogSection",
    "load_config",
    "new_logger",
    "WordGateError",
    "WebhookError",
    "VerificationError",
    "DecodeError",
    "APIError",
    "ConfigError",
    "WebhookErrorCodes",
    "APIErrorCodes",
    "ConfigErrorCodes",
]
