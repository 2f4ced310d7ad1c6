"""Conversation controller configuration constants.

Centralizes timeouts, defaults and the user-facing texts of the controller.
"""

# Request configuration
CHAT_ENDPOINT = "/api/chat"
DEFAULT_MODEL = "mistral"
REQUEST_TIMEOUT_SECONDS = 60.0  # Deadline for request plus response ingestion

# User-facing texts
NO_RESPONSE_TEXT = "No response received from the model."
TIMEOUT_MESSAGE = "Time limit exceeded. Please retry."
UNEXPECTED_FORMAT_MESSAGE = "Unexpected response format from server"
UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred"

# Shown instead of an empty reply when a send fails
FALLBACK_RESPONSES = (
    "Sorry, I couldn't connect to the AI service. Here is a fallback reply.",
    "The AI service is currently unavailable. Please try again later.",
    "I'm having trouble reaching the AI service, but I'm still here to help.",
    "Something went wrong with the AI service. Let me give you a simple answer instead.",
)
