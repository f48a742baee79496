from collections.abc import Sequence

from ..schemas.common import CameraFeed, RankedLocality

PLAYER_PARAMS = "autoplay=1&mute=1&loop=1&controls=0&showinfo=0&modestbranding=1&rel=0"


def player_url(embed_url: str) -> str:
    sep = "&" if "?" in embed_url else "?"
    return f"{embed_url}{sep}{PLAYER_PARAMS}"


def attach_feeds(ranked: Sequence[RankedLocality], feed_urls: Sequence[str]) -> list[CameraFeed]:
    """Pair the i-th nearest locality with the i-th feed; extra ranks get no feed."""
    return [
        CameraFeed(locality=loc, feed_url=player_url(feed_urls[i]) if i < len(feed_urls) else None)
        for i, loc in enumerate(ranked)
    ]
