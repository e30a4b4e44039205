"""Run the consent flow ahead of time so the server starts with a cached token."""
import os
import sys

from dotenv import load_dotenv

from .auth import check_client_secrets, get_credential_manager
from .auth.oauth_config import reload_oauth_config
from .utils.errors import ReviewsError, format_error


def main() -> int:
    load_dotenv()
    config = reload_oauth_config()

    error_message = check_client_secrets()
    if error_message:
        print(error_message)
        return 1

    print("Starting Google authorization for the Play Developer API...")
    try:
        credentials = get_credential_manager().acquire()
    except ReviewsError as e:
        print(format_error("Authorization", e))
        return 1

    if credentials.refresh_token and os.path.exists(config.token_path):
        print(f"Authorization successful! Token stored at {config.token_path}.")
    else:
        print("Authorization successful, but no token was cached.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
