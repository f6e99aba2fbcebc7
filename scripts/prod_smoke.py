#!/usr/bin/env python3
"""Online wallet smoke checks against a running deployment."""

from __future__ import annotations

import argparse
import time
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

import httpx


@dataclass
class SmokeContext:
    base_url: str
    api_prefix: str
    timeout_seconds: float
    verify_tls: bool
    retries: int
    retry_delay_seconds: float


def _api_url(ctx: SmokeContext, path: str) -> str:
    return f"{ctx.base_url}{ctx.api_prefix}{path}"


def _step(name: str) -> None:
    print(f"\n==> {name}")


def _assert_status(resp: httpx.Response, expected: int, step_name: str) -> None:
    if resp.status_code != expected:
        body = resp.text
        raise RuntimeError(
            f"{step_name} failed: expected HTTP {expected}, got {resp.status_code}. Body: {body}"
        )


def _request(
    client: httpx.Client,
    method: str,
    url: str,
    *,
    step_name: str,
    expected_status: int = 200,
    **kwargs: Any,
) -> httpx.Response:
    retries = int(kwargs.pop("retries", 0))
    retry_delay_seconds = float(kwargs.pop("retry_delay_seconds", 0.0))
    last_error: Exception | None = None
    for attempt in range(retries + 1):
        try:
            resp = client.request(method, url, **kwargs)
            if resp.status_code in {502, 503, 504} and attempt < retries:
                print(
                    f"{step_name}: transient HTTP {resp.status_code}, "
                    f"retrying ({attempt + 1}/{retries})..."
                )
                time.sleep(retry_delay_seconds)
                continue
            _assert_status(resp, expected_status, step_name)
            return resp
        except (httpx.ConnectTimeout, httpx.ReadTimeout, httpx.ConnectError, httpx.RemoteProtocolError) as exc:
            last_error = exc
            if attempt >= retries:
                raise RuntimeError(f"{step_name} request failed: {exc}") from exc
            print(f"{step_name}: transient error ({exc}), retrying ({attempt + 1}/{retries})...")
            time.sleep(retry_delay_seconds)
        except httpx.HTTPError as exc:
            raise RuntimeError(f"{step_name} request failed: {exc}") from exc
    if last_error:
        raise RuntimeError(f"{step_name} request failed: {last_error}") from last_error
    raise RuntimeError(f"{step_name} failed unexpectedly.")


def _balance_of(resp: httpx.Response, step_name: str) -> Decimal:
    body = resp.json()
    if "amount" not in body:
        raise RuntimeError(f"{step_name} returned no amount. Body: {body}")
    return Decimal(str(body["amount"]))


def run_smoke(
    *,
    base_url: str,
    api_prefix: str,
    timeout_seconds: float,
    verify_tls: bool,
    retries: int,
    retry_delay_seconds: float,
    round_trip_amount: Decimal | None,
    client: httpx.Client | None = None,
) -> None:
    ctx = SmokeContext(
        base_url=base_url.rstrip("/"),
        api_prefix="/" + api_prefix.strip("/"),
        timeout_seconds=timeout_seconds,
        verify_tls=verify_tls,
        retries=retries,
        retry_delay_seconds=retry_delay_seconds,
    )
    retry_kwargs = {"retries": ctx.retries, "retry_delay_seconds": ctx.retry_delay_seconds}

    owns_client = client is None
    if client is None:
        client = httpx.Client(timeout=ctx.timeout_seconds, verify=ctx.verify_tls)

    try:
        _step("Health checks")
        healthz = _request(client, "GET", f"{ctx.base_url}/healthz", step_name="GET /healthz", **retry_kwargs)
        readyz = _request(client, "GET", f"{ctx.base_url}/readyz", step_name="GET /readyz", **retry_kwargs)
        print(f"/healthz -> {healthz.status_code}")
        print(f"/readyz -> {readyz.status_code}")

        _step("Balance")
        start = _balance_of(
            _request(client, "GET", _api_url(ctx, "/onlinewallet/balance"), step_name="GET /onlinewallet/balance", **retry_kwargs),
            "GET /onlinewallet/balance",
        )
        print(f"Wallet balance: {start}")

        if round_trip_amount is not None:
            # Deposit then withdraw the same amount so the wallet ends where it started.
            # Not retried: a repeated POST would record a second entry.
            _step("Deposit")
            after_deposit = _balance_of(
                _request(
                    client,
                    "POST",
                    _api_url(ctx, "/onlinewallet/deposit"),
                    step_name="POST /onlinewallet/deposit",
                    json={"amount": str(round_trip_amount)},
                ),
                "POST /onlinewallet/deposit",
            )
            if after_deposit != start + round_trip_amount:
                raise RuntimeError(
                    f"Deposit returned {after_deposit}, expected {start + round_trip_amount}."
                )
            print(f"Balance after deposit: {after_deposit}")

            _step("Withdraw")
            after_withdraw = _balance_of(
                _request(
                    client,
                    "POST",
                    _api_url(ctx, "/onlinewallet/withdraw"),
                    step_name="POST /onlinewallet/withdraw",
                    json={"amount": str(round_trip_amount)},
                ),
                "POST /onlinewallet/withdraw",
            )
            if after_withdraw != start:
                raise RuntimeError(f"Withdraw returned {after_withdraw}, expected {start}.")
            print(f"Balance after withdraw: {after_withdraw}")
    finally:
        if owns_client:
            client.close()

    print("\nSUCCESS: online wallet smoke checks passed.")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run online wallet smoke checks.")
    parser.add_argument("--base-url", required=True, help="Backend base URL, e.g. https://wallet.example.com")
    parser.add_argument("--api-prefix", default="/api/v1", help="API prefix (default: /api/v1)")
    parser.add_argument("--timeout", type=float, default=20.0, help="HTTP timeout in seconds")
    parser.add_argument("--retries", type=int, default=3, help="Retries for transient network/5xx errors")
    parser.add_argument(
        "--retry-delay",
        type=float,
        default=5.0,
        help="Delay between retries in seconds",
    )
    parser.add_argument("--insecure", action="store_true", help="Disable TLS certificate verification")
    parser.add_argument(
        "--round-trip-amount",
        type=Decimal,
        default=None,
        help="Deposit and then withdraw this amount; skipped when omitted",
    )
    return parser


def main() -> None:
    args = build_parser().parse_args()
    run_smoke(
        base_url=args.base_url,
        api_prefix=args.api_prefix,
        timeout_seconds=args.timeout,
        verify_tls=not args.insecure,
        retries=max(0, args.retries),
        retry_delay_seconds=max(0.0, args.retry_delay),
        round_trip_amount=args.round_trip_amount,
    )


if __name__ == "__main__":
    main()
