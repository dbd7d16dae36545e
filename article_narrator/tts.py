"""TTS generation via the ElevenLabs HTTP API or edge-tts."""

import asyncio
import os
import time

import edge_tts
import requests

from article_narrator.constants import (
    ELEVENLABS_API_URL,
    STREAM_CHUNK_BYTES,
    TTS_RETRY_BASE_DELAY,
    TTS_RETRY_COUNT,
    TTS_TIMEOUT_SECONDS,
)
from article_narrator.errors import SynthesisError


def _error_detail(response: requests.Response) -> str:
    """Pull a readable message out of an error response body."""
    try:
        body = response.json()
    except ValueError:
        return response.text.strip()

    detail = body.get("detail", body) if isinstance(body, dict) else body
    if isinstance(detail, dict):
        return detail.get("message") or detail.get("status") or str(detail)
    return str(detail)


def synthesize_elevenlabs(
    text: str,
    output_path: str,
    voice_id: str,
    api_key: str,
    model_id: str = "",
    timeout: float = TTS_TIMEOUT_SECONDS,
) -> None:
    """POST one chunk to ElevenLabs and stream the MP3 body to output_path."""
    url = f"{ELEVENLABS_API_URL}/{voice_id}"
    payload = {"text": text}
    if model_id:
        payload["model_id"] = model_id
    headers = {
        "Content-Type": "application/json",
        "Accept": "audio/mpeg",
        "xi-api-key": api_key,
    }

    try:
        with requests.post(url, json=payload, headers=headers, stream=True, timeout=timeout) as response:
            if not response.ok:
                detail = _error_detail(response)
                raise SynthesisError(
                    f"HTTP {response.status_code} from ElevenLabs: {detail}",
                    status_code=response.status_code,
                    detail=detail,
                )
            with open(output_path, "wb") as f:
                for block in response.iter_content(chunk_size=STREAM_CHUNK_BYTES):
                    if block:
                        f.write(block)
    except requests.Timeout as e:
        raise SynthesisError(f"request timed out after {timeout}s") from e
    except requests.RequestException as e:
        raise SynthesisError(f"request failed: {e}") from e
    except OSError as e:
        raise SynthesisError(f"could not write {output_path}: {e}") from e


def synthesize_edge(
    text: str,
    output_path: str,
    voice: str,
    timeout: float = TTS_TIMEOUT_SECONDS,
) -> None:
    """Sync wrapper around edge_tts.Communicate() with a timeout."""
    try:
        communicate = edge_tts.Communicate(text, voice)
        asyncio.run(asyncio.wait_for(communicate.save(output_path), timeout))
    except asyncio.TimeoutError as e:
        raise SynthesisError(f"edge-tts timed out after {timeout}s") from e
    except OSError as e:
        raise SynthesisError(f"could not write {output_path}: {e}") from e
    except Exception as e:
        raise SynthesisError(f"edge-tts failed: {e}") from e


def synthesize(
    text: str,
    output_path: str,
    voice_id: str,
    api_key: str = "",
    provider: str = "elevenlabs",
    model_id: str = "",
    timeout: float = TTS_TIMEOUT_SECONDS,
) -> None:
    """Synthesize one chunk to output_path with the chosen provider.

    Raises SynthesisError on any failure, including a 0-byte result. A partial
    file may be left behind and must not be trusted.
    """
    if provider == "elevenlabs":
        synthesize_elevenlabs(text, output_path, voice_id, api_key, model_id=model_id, timeout=timeout)
    elif provider == "edge":
        synthesize_edge(text, output_path, voice_id, timeout=timeout)
    else:
        raise SynthesisError(f"unknown provider: {provider}")

    if not os.path.exists(output_path) or os.path.getsize(output_path) == 0:
        raise SynthesisError(f"TTS produced 0-byte file for: {text[:50]}...")


def synthesize_with_retry(
    text: str,
    output_path: str,
    voice_id: str,
    api_key: str = "",
    provider: str = "elevenlabs",
    model_id: str = "",
    timeout: float = TTS_TIMEOUT_SECONDS,
    max_attempts: int = TTS_RETRY_COUNT,
    base_delay: float = TTS_RETRY_BASE_DELAY,
) -> None:
    """Call synthesize() up to max_attempts times with exponential backoff.

    Only SynthesisError is retried. The last error is re-raised once attempts
    run out.
    """
    last_error = None
    for attempt in range(max_attempts):
        try:
            synthesize(
                text, output_path, voice_id,
                api_key=api_key, provider=provider, model_id=model_id, timeout=timeout,
            )
            return
        except SynthesisError as e:
            last_error = e

        if attempt < max_attempts - 1:
            delay = base_delay * (2 ** attempt)
            print(f"  [retry] {last_error} (waiting {delay:.1f}s)")
            time.sleep(delay)

    raise last_error
