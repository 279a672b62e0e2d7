"""
REST route builders.
"""


class Routes:
    """Paths relative to the versioned API root."""

    @staticmethod
    def guilds() -> str:
        return "/guilds"

    @staticmethod
    def guild(guild_id: str) -> str:
        return f"/guilds/{guild_id}"

    @staticmethod
    def guild_incident_actions(guild_id: str) -> str:
        return f"/guilds/{guild_id}/incident-actions"

    @staticmethod
    def user_guilds(user_id: str = "@me") -> str:
        return f"/users/{user_id}/guilds"
