"""
Background tasks run inside the API process.

- keepalive: periodic self-ping for hosts that idle free instances
"""

from audio_vault.worker.keepalive import KeepAlivePinger, PingResult, start_keepalive

__all__ = ["KeepAlivePinger", "PingResult", "start_keepalive"]
