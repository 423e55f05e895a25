"""Simple HTTP client for manual testing."""

from __future__ import annotations

import argparse
import base64
import logging
import pathlib
import time

import httpx

from gemini_proxy.audio import is_linear_pcm, parse_sample_rate, pcm_to_wav

DEFAULT_URL = "http://127.0.0.1:8080/process"


def run_client(url: str, prompt: str, output: pathlib.Path | None, timeout: float) -> None:
    """Send a prompt to the proxy, print the answer and store any audio."""

    logger = logging.getLogger("relay_client")
    start = time.perf_counter()

    response = httpx.post(url, json={"prompt": prompt}, timeout=timeout)
    data = response.json()
    elapsed = time.perf_counter() - start

    if response.status_code != 200:
        logger.error("Proxy returned %d: %s", response.status_code, data.get("error"))
        raise SystemExit(1)

    logger.info("Received reply in %.2fs", elapsed)
    print(data["text"])

    if data.get("error"):
        logger.warning("Audio unavailable: %s", data["error"])
        return

    audio_data = data.get("audioData")
    if not audio_data or output is None:
        return

    audio = base64.b64decode(audio_data)
    mime_type = data.get("mimeType")
    if is_linear_pcm(mime_type):
        audio = pcm_to_wav(audio, parse_sample_rate(mime_type))
    output.write_bytes(audio)
    logger.info("Audio (%s, %d bytes) written to %s", mime_type, len(audio), output)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Test client for the Gemini proxy service.")
    parser.add_argument("--url", default=DEFAULT_URL, help="Relay URL (default: %(default)s)")
    parser.add_argument("--prompt", required=True, help="Prompt to send.")
    parser.add_argument("--save", type=pathlib.Path, help="Optional output file (wav).")
    parser.add_argument(
        "--timeout", type=float, default=120.0, help="Seconds to wait for the relay to answer."
    )
    parser.add_argument("--log-level", default="INFO", help="Logging level.")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO))
    try:
        run_client(args.url, args.prompt, args.save, args.timeout)
    except KeyboardInterrupt:  # pragma: no cover - manual usage only
        pass


if __name__ == "__main__":  # pragma: no cover
    main()
