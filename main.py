"""Deployment wrapper for the Gemini proxy Cloud Function."""

from gemini_proxy.functions import process_gemini_request

__all__ = ["process_gemini_request"]
