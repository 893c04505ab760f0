# Profiles live primarily in Supabase Auth user_metadata (full_name, avatar_url)
# A copy is kept in the KV store under profile:{user_id}

"""
Profile record (JSON value in the kv_store table):
- id: uuid (auth.users.id)
- email: text, from auth.users
- full_name: text (nullable), defaults to the local part of the email
- avatar_url: text (nullable); only the URL is stored, no file upload
- created_at: timestamp of the auth user
"""


def profile_key(user_id: str) -> str:
    return f"profile:{user_id}"
