"""Example signing an outgoing httpx request and verifying it on receipt."""

import httpx

from request_signing import (
    HttpRequest,
    InMemorySignatureKeyRepository,
    SignatureKey,
    create_signing_service,
)


def main():
    """Sign a request body with HMAC-SHA512 and verify it again."""
    # Both sides share the same key store
    repository = InMemorySignatureKeyRepository(
        [SignatureKey(id="SL-1234-1234", secret="shared-secret")]
    )
    service = create_signing_service(repository)

    outgoing = httpx.Request(
        "POST", "https://pay.nl/v1/orders", content=b'{"amount": 1000}'
    )
    signed = service.sign(
        HttpRequest.from_httpx(outgoing), "SL-1234-1234", "sha512", "HMAC"
    ).to_httpx()

    print(f"✅ Signed request for {signed.url}")
    for name in ("Signature", "Signature-KeyID", "Signature-Method", "Signature-Algorithm"):
        print(f"   {name}: {signed.headers[name]}")

    # The receiving side rebuilds the request from whatever arrived
    received = HttpRequest.from_httpx(signed)
    print(f"🔐 Verified: {service.verify(received)}")
    print(f"🔐 Verified after tampering: {service.verify(received.with_body('{}'))}")


if __name__ == "__main__":
    main()
