"""Voice activity detection for captured audio."""

from __future__ import annotations

import hashlib
import logging
import math
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Sequence, Union

import requests

log = logging.getLogger(__name__)

SILERO_VAD_SHA256 = "b73d9134cc9c86c5a0ac86082fbb74b10d926fe5d0b8a3dd0cee93aa3a2ef5f3"
SILERO_VAD_URL = (
    "https://github.com/snakers4/silero-vad/raw/master/src/silero_vad/data/silero_vad.onnx"
)
SILERO_VAD_FILENAME = "silero_vad.onnx"

_FULL_SCALE = 32768.0
_SILENCE_DB = -100.0


class VoiceActivityDetector(ABC):
    """Detects speech in blocks of 16-bit audio samples."""

    @abstractmethod
    def process(self, samples: Sequence[int]) -> bool:
        """Return True if speech is detected in the samples."""

    @abstractmethod
    def reset(self) -> None:
        """Clear internal state between recordings."""


def calculate_rms(samples: Sequence[int]) -> float:
    """Root mean square of the samples; 0.0 for no samples."""
    if not samples:
        return 0.0
    return math.sqrt(sum(float(s) * float(s) for s in samples) / len(samples))


def rms_to_db(rms: float) -> float:
    """Convert an RMS level to dB relative to full scale."""
    if rms <= 0.0:
        return _SILENCE_DB
    return 20.0 * math.log10(rms / _FULL_SCALE)


class DbThresholdVad(VoiceActivityDetector):
    """Reports speech whenever the level exceeds a dB threshold."""

    def __init__(self, threshold_db: float) -> None:
        self.threshold_db = threshold_db

    def process(self, samples: Sequence[int]) -> bool:
        return rms_to_db(calculate_rms(samples)) > self.threshold_db

    def reset(self) -> None:
        # Stateless: nothing to clear.
        pass


def _sha256_hex(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def verify_sha256(path: Union[str, Path], expected_hex: str) -> bool:
    """Whether the file's SHA-256 digest equals the expected hex string."""
    return _sha256_hex(Path(path).read_bytes()) == expected_hex


def ensure_silero_model(model_dir: Union[str, Path]) -> Path:
    """Return the path of the Silero VAD model, downloading it when needed.

    An existing file whose hash does not match is removed and fetched again.
    A downloaded file with an unexpected hash is kept, with a warning.
    """
    model_dir = Path(model_dir)
    model_path = model_dir / SILERO_VAD_FILENAME
    if model_path.exists():
        try:
            if verify_sha256(model_path, SILERO_VAD_SHA256):
                log.debug("Silero VAD model verified: %s", model_path)
                return model_path
            log.warning(
                "Silero VAD model hash mismatch - re-downloading. "
                "This may indicate model corruption or an upstream update."
            )
        except OSError as exc:
            log.warning("Failed to verify Silero VAD model: %s - re-downloading", exc)
        model_path.unlink(missing_ok=True)

    model_dir.mkdir(parents=True, exist_ok=True)

    log.debug("Downloading Silero VAD model from %s", SILERO_VAD_URL)
    response = requests.get(SILERO_VAD_URL, timeout=120)
    content = response.content

    actual_hex = _sha256_hex(content)
    if actual_hex != SILERO_VAD_SHA256:
        log.warning(
            "Downloaded Silero VAD model has unexpected hash.\n"
            "Expected: %s\nGot: %s\n"
            "The upstream model may have been updated. Proceeding with caution.",
            SILERO_VAD_SHA256,
            actual_hex,
        )

    model_path.write_bytes(content)
    log.debug("Silero VAD model saved to %s", model_path)
    return model_path


def create_vad(
    vad_enabled: bool,
    vad_threshold: float,
    silence_threshold_db: float,
    sample_rate: int,
) -> VoiceActivityDetector:
    """Create the voice activity detector for the given configuration.

    No neural inference runtime is available here, so a requested neural
    detector falls back to the dB threshold detector.
    """
    if vad_enabled:
        log.warning(
            "Neural VAD (threshold %s, %d Hz) unavailable, falling back to dB threshold",
            vad_threshold,
            sample_rate,
        )
    log.debug("Using dB threshold VAD with threshold %s dB", silence_threshold_db)
    return DbThresholdVad(silence_threshold_db)