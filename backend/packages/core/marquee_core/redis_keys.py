"""Redis key templates and TTL constants.

Centralized management of all Redis keys used in the application to prevent
conflicts and make maintenance easier.
"""


class RedisKeys:
    """Redis key templates and helper methods."""

    # ============================================================================
    # Rate Limiting Keys
    # ============================================================================

    # Fixed-window request counter per client
    # Format: api_rate_limit:{scope}:{client_id}
    # TTL: one rate-limit window, set when the counter is created
    @staticmethod
    def api_rate_limit(scope: str, client_id: str) -> str:
        """
        Get API rate-limit counter key.

        Args:
            scope: Budget name (e.g., 'api', 'write').
            client_id: Client identifier, usually an IP address.

        Returns:
            Redis key string.
        """
        return f"api_rate_limit:{scope}:{client_id}"
