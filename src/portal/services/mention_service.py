"""
Mention Service

Extracts mentioned member ids from rich post content.
"""
import logging
import re
from typing import List, Optional

logger = logging.getLogger("byte.services.mention")


class MentionService:
    """Service for parsing mention markers"""

    # Editor markup: <span data-mention="42" ...>@Name</span>
    # Only the opening tag matters; the label is display text.
    MENTION_PATTERN = re.compile(
        r'<span\b[^>]*?\bdata-mention\s*=\s*(?:"([^"]*)"|\'([^\']*)\'|([^\s>]+))',
        re.IGNORECASE,
    )
    ID_PATTERN = re.compile(r'[0-9]+')

    def extract_mentions(self, content: Optional[str]) -> List[int]:
        """
        Return mentioned member ids in first-occurrence order, without duplicates.

        Markers with a missing or non-numeric id are skipped.
        """
        if not content:
            return []

        seen = set()
        mentions = []
        for match in self.MENTION_PATTERN.finditer(content):
            raw = next((g for g in match.groups() if g is not None), "").strip()
            if not self.ID_PATTERN.fullmatch(raw):
                logger.debug(f"Skipping malformed mention marker: {match.group(0)[:80]!r}")
                continue
            member_id = int(raw)
            if member_id not in seen:
                seen.add(member_id)
                mentions.append(member_id)
        return mentions
