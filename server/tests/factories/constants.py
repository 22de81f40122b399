"""Stable test constants for predictable test data.

Clerk user ids are opaque strings, so fixed strings stand in for them.
"""

# Default signed-in user
TEST_USER_ID = "user_test_default"

# A second user for ownership checks
OTHER_USER_ID = "user_test_other"

TEST_FOLDER_NAME = "Test Folder"

TEST_PROMPT_NAME = "Test Prompt"
TEST_PROMPT_DESCRIPTION = "A prompt created by the test factories"
TEST_PROMPT_CONTENT = "Summarize the following text:"


def make_test_user_id(suffix: str) -> str:
    """Generate a stable Clerk-style user id with suffix."""
    return f"user_test_{suffix}"
