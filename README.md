# ledgerkit

Building blocks for payment infrastructure, using only the Python standard
library at runtime.

- **Canonical types**: `Money` held in minor units with a `Currency`
  (`ledgerkit.money`, `ledgerkit.currency`). `PaymentState` and its allowed
  transitions, `PaymentId`, `PaymentMethod` and `PaymentStatus`
  (`ledgerkit.payment`). `ProviderId` and `ProviderCapability`
  (`ledgerkit.provider`). `CanonicalEvent` and `EventKind`
  (`ledgerkit.events`). `RawWebhook` and `VerificationResult`
  (`ledgerkit.webhook`).
- **Errors**: `LedgerError` and its subclasses, such as `ProviderError`,
  `InvalidStateTransition`, `OperationTimeout` and `NotFoundError`, each with
  `is_retryable()`. `ErrorCategory` classifies provider errors
  (`ledgerkit.errors`).
- **Connectors**: the `PaymentConnector` interface with its request and
  response dataclasses (`ledgerkit.connector`), and `MockConnector`, which
  simulates a provider in memory (`ledgerkit.mock_connector`).
- **Webhooks**: the `WebhookVerifier` interface (`ledgerkit.verifier`).
  `HmacVerifier` checks HMAC-SHA256 signatures in hex or base64, with an
  optional prefix (`ledgerkit.hmac_verifier`). `TimestampValidator` checks
  timestamp tolerance (`ledgerkit.timestamp`). `WebhookProcessor` verifies,
  deduplicates and parses deliveries (`ledgerkit.processor`).
- **Idempotency**: the `IdempotencyStore` interface (`ledgerkit.idempotency`),
  with `InMemoryIdempotencyStore` and `InMemoryEventStore`
  (`ledgerkit.memory_store`).
- **Retries, clocks and secrets**: `RetryPolicy` with capped exponential
  backoff and deterministic jitter (`ledgerkit.retry`). `SystemClock` and
  `MockClock` (`ledgerkit.clock`). `EnvSecretProvider`
  (`ledgerkit.secret_provider`).
- **Observability**: `CorrelationId` (`ledgerkit.correlation`).
  `RedactedValue`, `redact_card` and `redact_email` (`ledgerkit.redact`).
  `init_logging` and `init_logging_json` (`ledgerkit.logsetup`).
- **Simulator**: built-in payment fixtures (`ledgerkit.fixture`) and
  `SimulatorRunner`, which plays them into canonical events
  (`ledgerkit.runner`).
- **Health endpoints**: `create_app()` returns a WSGI application that
  serves `/health` and `/ready` (`ledgerkit.server`).

## Installation

```
pip install ledgerkit
```

Python 3.10 or later is required.

## Command line

Installing the package provides the `lk` command. It logs to stderr at the
level named in the `LEDGERKIT_LOG` environment variable (`debug`, `info`,
`warning`, `error`, `off`). The default level is `info`.

List and generate fixtures:

```
lk fixture list
lk fixture generate --kind successful --amount 5000
lk fixture generate --kind refunded --amount 1200 --output refund.json
lk fixture replay refund.json
```

`--kind` is one of `successful`, `failed` or `refunded`. `--amount` is in
minor units. `generate --currency` is accepted, but fixtures are always
generated in USD. `replay` reads a fixture JSON file and prints the events
it produces.

Run the simulator on the default fixture, on a named built-in fixture, or on
all of them. The built-in fixtures are `successful_payment`,
`failed_payment` and `refunded_payment`. The simulator waits for each
event's delay.

```
lk simulate
lk simulate --fixture failed_payment
lk simulate --all
```

Check a hex-encoded HMAC-SHA256 signature of a payload file:

```
lk verify --payload payload.json --secret secret --signature <hex-signature>
```

Print the outline for a new connector:

```
lk scaffold acme
```

`lk --version` prints the version. Errors are printed to stderr and give
exit status 1.

## Library use

Money is held in minor units and printed with the currency's precision:

```python
from ledgerkit.currency import Currency
from ledgerkit.money import Money

print(Money(1050, Currency.USD))                     # 10.50 USD
print(Money(1000, Currency.JPY))                     # 1000 JPY
print(Money.from_major(10.50, Currency.USD).amount)  # 1050
```

`Currency.parse` accepts the predefined codes and any other three-letter
uppercase code. It raises `ValueError` otherwise.

Payment states know which transitions are allowed:

```python
from ledgerkit.payment import PaymentState

PaymentState.AUTHORIZED.can_transition_to(PaymentState.CAPTURED)  # True
PaymentState.REFUNDED.is_terminal()                               # True
```

Verifying a signed webhook:

```python
from ledgerkit.hmac_verifier import HmacVerifier
from ledgerkit.webhook import RawWebhook

verifier = HmacVerifier.hex(b"secret", "x-webhook-signature")
body = '{"event":"payment.captured"}'
signature = verifier.sign_hex(body.encode())

webhook = RawWebhook(headers={"X-Webhook-Signature": signature}, body=body)
assert verifier.verify(webhook).is_valid()
```

Header lookup on `RawWebhook` is case-insensitive. A missing signature
header raises `MissingSignatureHeader`. A signature that cannot be decoded
raises `InvalidSignatureEncoding`. A signature that does not match gives a
rejected `VerificationResult`.

Driving the mock connector:

```python
import asyncio

from ledgerkit.connector import AuthorizeRequest, CaptureRequest
from ledgerkit.currency import Currency
from ledgerkit.mock_connector import MockConfig, MockConnector
from ledgerkit.money import Money
from ledgerkit.payment import PaymentId, PaymentMethod


async def demo():
    connector = MockConnector(MockConfig())
    auth = await connector.authorize(
        AuthorizeRequest(
            payment_id=PaymentId.generate(),
            amount=Money(5000, Currency.USD),
            payment_method=PaymentMethod.CARD,
        )
    )
    capture = await connector.capture(
        CaptureRequest(
            payment_id=auth.payment_id,
            provider_reference=auth.provider_reference,
        )
    )
    print(capture.captured_amount)  # 50.00 USD


asyncio.run(demo())
```

`MockConfig` can make authorisation, capture or refund fail, and can add
latency. Failures raise `AuthorizationDeclined`, `CaptureFailed` or
`RefundFailed`.

Processing a webhook through verification, replay detection and parsing:

```python
import asyncio

from ledgerkit.memory_store import InMemoryIdempotencyStore
from ledgerkit.mock_connector import MockConnector
from ledgerkit.processor import Duplicate, Processed, WebhookProcessor
from ledgerkit.webhook import RawWebhook


async def demo():
    connector = MockConnector()
    processor = WebhookProcessor(connector, InMemoryIdempotencyStore())
    webhook = RawWebhook(
        headers={"x-signature": "secret"},
        body='{"type":"payment.captured","payment_id":"pay_1","amount":5000}',
    )
    first = await processor.process(webhook, connector.parse_webhook)
    again = await processor.process(webhook, connector.parse_webhook)
    assert isinstance(first, Processed) and isinstance(again, Duplicate)


asyncio.run(demo())
```

`parse_fn` may be a plain function or a coroutine function. Rejected
deliveries come back as `Rejected`.

Retry decisions:

```python
from ledgerkit.retry import GiveUp, Retry, RetryPolicy

policy = RetryPolicy(max_retries=2)
decision = policy.evaluate(0)
if isinstance(decision, Retry):
    print(decision.delay, decision.attempt)
```

Redacting sensitive values in logs:

```python
from ledgerkit.redact import RedactedValue, redact_email

print(redact_email("user@example.com"))  # ***@example.com
print(RedactedValue("placeholder"))      # [REDACTED]
```

Serving the health endpoints with the standard library:

```python
from wsgiref.simple_server import make_server

from ledgerkit.server import create_app

make_server("localhost", 8000, create_app()).serve_forever()
```

## What it does not do

- The only connector is `MockConnector`. Nothing here talks to a real
  payment provider.
- Storage is in memory only. Idempotency records and events are lost when
  the process ends.
- The WSGI application serves only `/health` and `/ready`. It has no webhook
  endpoints, and no command starts it. Host it yourself, as shown above.
- `WebhookProcessor` keeps a `timestamp_tolerance_secs` setting but does not
  check timestamps. Use `TimestampValidator` for that.

## Running the tests

```
pip install "ledgerkit[test]"
pytest
```