"""Activate team members stuck in pending status.

Reconciles membership status in a local team store: either a single
member or every pending member of a team. Only the team owner may do it.

Usage:
    python scripts/activate_members.py --team TEAM_ID --actor OWNER_ID
    python scripts/activate_members.py --team TEAM_ID --actor OWNER_ID --member USER_ID
    python scripts/activate_members.py --data-dir ./data --team TEAM_ID --actor OWNER_ID
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from note_access import AccessConfig, NoteAccessError, TeamStore
from note_access.local import LocalDocumentClient
from note_access.logging_utils import configure_logging

logger = logging.getLogger(__name__)


async def run(data_dir: Path, team_id: str, actor_id: str, member_id: str | None) -> int:
    store = TeamStore(LocalDocumentClient(data_dir))

    try:
        if member_id:
            changed = await store.activate_member(team_id, member_id, actor_id)
            if changed:
                logger.info("Member %s activated in team %s", member_id, team_id)
            else:
                logger.info("Member %s already active in team %s", member_id, team_id)
        else:
            count = await store.activate_pending_members(team_id, actor_id)
            logger.info("Activated %d pending members in team %s", count, team_id)
    except NoteAccessError as e:
        logger.error("Failed: %s", e.message)
        return 1

    return 0


def main() -> None:
    config = AccessConfig.from_env()

    parser = argparse.ArgumentParser(
        description="Activate pending team members",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=config.data_dir,
        help=f"Local document store directory (default: {config.data_dir})",
    )
    parser.add_argument("--team", required=True, help="Team ID")
    parser.add_argument("--actor", required=True, help="User ID of the team owner")
    parser.add_argument("--member", help="Activate only this member")
    args = parser.parse_args()

    configure_logging(config.log_level, json_output=config.json_logs, logger_name=None)

    sys.exit(asyncio.run(run(args.data_dir, args.team, args.actor, args.member)))


if __name__ == "__main__":
    main()
