from .orchestrator import (  # noqa: F401
    CheckoutError,
    CheckoutOrchestrator,
    CheckoutResult,
    build_order_payload,
    build_payment_payload,
    order_lines,
    start_checkout,
)
