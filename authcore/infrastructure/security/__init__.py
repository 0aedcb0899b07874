"""Security adapters: password hashing, access token signing, refresh secrets."""
