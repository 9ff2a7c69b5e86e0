"""Firm content quoted by the assistant.

Hides the literal copy (contact details, booking link, canned replies)
so the prompt, the controller and the UI agree on the same wording.
"""

from typing import Final

FIRM_NAME: Final = "HSB Accounting & Finance"
ASSISTANT_NAME: Final = "HSB Smart Assistant"

# Third-party scheduling page; only ever quoted as text
BOOKING_URL: Final = "https://calendly.com/abdulhbwork/30min"

PHONE: Final = "(555) 123-4567"
EMAIL: Final = "contact@hsbaccounting.com"
OFFICE_ADDRESS: Final = "123 Financial District Blvd, Suite 400, New York, NY 10005"

SERVICES: Final = (
    "Tax Preparation",
    "Bookkeeping",
    "Payroll",
    "Financial Consulting",
)

GREETING: Final = (
    f"Hello! I am the {ASSISTANT_NAME}. "
    "How can I help with your accounting questions today?"
)

# Shown when the model stream fails mid-turn
GENERIC_FALLBACK: Final = "I'm having trouble connecting right now. Please try again later."

# Shown when no API key is configured
UNCONFIGURED_FALLBACK: Final = (
    "I'm sorry, I cannot connect to the server right now. "
    f"Please contact the office directly or book a call at {BOOKING_URL}"
)

# Shown when a turn is cancelled before any text arrived
INTERRUPTED_TEXT: Final = "Response interrupted. Feel free to ask again."

DISCLAIMER: Final = "AI can make mistakes. Please consult our CPAs."
