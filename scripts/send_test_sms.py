"""
Test SMS delivery

Run this script to verify the configured SMS provider can deliver a
verification message.

Usage: python scripts/send_test_sms.py
"""

import asyncio
import sys
from pathlib import Path
from dotenv import load_dotenv

sys.path.insert(0, str(Path(__file__).parent.parent))

# Load environment variables
load_dotenv()

from app.core.config import settings
from app.core.exceptions import ConfigurationError, TransportError
from app.core.logging import setup_logging
from app.core.security import generate_verification_code
from app.services.sms_service import get_sms_sender
from utils.constants import VERIFICATION_SMS_TEMPLATE
from utils.validation_utils import validate_account_phone

setup_logging(level="INFO")


def show_config():
    """Print the SMS configuration"""
    print("=" * 60)
    print("  SMS Configuration Test")
    print("=" * 60 + "\n")

    print(f"Provider: {settings.SMS_PROVIDER}")
    print(f"Account SID: {settings.TWILIO_ACCOUNT_SID[:10]}..." if settings.TWILIO_ACCOUNT_SID else "Account SID: ❌ Not set")
    print(f"Auth Token: {'✅ Set' if settings.TWILIO_AUTH_TOKEN else '❌ Not set'}")
    print(f"Sender Number: {settings.TWILIO_PHONE_NUMBER or '❌ Not set'}\n")


async def send_test_message():
    """Send a sample verification SMS"""
    try:
        sender = get_sms_sender()
    except ConfigurationError as e:
        print(f"⚠️  {e.message}. Update the TWILIO_* variables in .env")
        return

    phone = input("Enter the phone number (with country code, e.g., +34600000000): ").strip()
    if not validate_account_phone(phone):
        print("❌ Phone number must have 8 to 15 digits with its country code")
        return

    message = VERIFICATION_SMS_TEMPLATE.format(
        brand=settings.SMS_BRAND_NAME,
        code=generate_verification_code(settings.VERIFICATION_CODE_LENGTH),
    )

    print(f"\n📤 Sending test message to {phone}...")
    try:
        message_id = await sender.send(phone, message)
    except TransportError as e:
        print(f"\n❌ Failed to send message\nError: {e.message}")
        return

    print(f"\n✅ Message accepted! ID: {message_id}")


if __name__ == "__main__":
    show_config()
    asyncio.run(send_test_message())
