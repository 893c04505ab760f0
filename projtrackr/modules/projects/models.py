# KV records: project:{user_id}:{project_id}
# This file documents the expected record layout
# Actual operations are handled via KVStore in service.py

"""
Project record (JSON value in the kv_store table):
- id: uuid4 string, generated on create, immutable
- user_id: uuid (auth.users.id) of the creator, taken from the verified token, immutable
- name: text
- email: text
- batch: text (e.g. "Fall 2025")
- vibe_link: text, must start with https://
- github_link: text, must contain github.com/
- tags: list of text, no duplicates, subset of TAG_VOCABULARY
- created_at: ISO-8601 UTC timestamp, set on create

The user_id segment of the key scopes every record to its owner; listing a
user's projects is a prefix scan on project:{user_id}:.
"""

TAG_VOCABULARY = ("Personal", "Academic", "Case Comp", "Client")


def project_prefix(user_id: str) -> str:
    return f"project:{user_id}:"


def project_key(user_id: str, project_id: str) -> str:
    return f"{project_prefix(user_id)}{project_id}"
