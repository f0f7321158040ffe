from __future__ import annotations

import argparse
import getpass
import json
import logging
import os
import sys

from .ad import ADClient, ADConfig, Credential, ObjectType, SearchScope
from .db import get_engine, make_session_factory
from .env_settings import get_env
from .exceptions import ADLookupError, DirectorySearchError
from .log_config import setup_logging
from .services import DbEventLogger, LoggingEventLogger, lookup

log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="adlookup",
        description="Find users, contacts, groups or OUs in Active Directory",
    )
    parser.add_argument("identity", help="DN, login, name or wildcard (e.g. 'j*')")
    parser.add_argument("-r", "--search-root",
                        help="DN, canonical name (corp.example.com/Staff) or domain (corp.example.com)")
    parser.add_argument("-t", "--type", default=ObjectType.USER.value,
                        choices=[t.value for t in ObjectType])
    parser.add_argument("-f", "--filter", help="raw LDAP filter, replaces the generated one")
    parser.add_argument("-s", "--scope", default=SearchScope.SUBTREE.value,
                        choices=[s.value for s in SearchScope])
    parser.add_argument("-p", "--properties", default="distinguishedName",
                        help="comma separated attribute list")
    parser.add_argument("-u", "--username", default=os.environ.get("ADLOOKUP_USERNAME", ""))
    parser.add_argument("--password", default=None,
                        help="bind password (defaults to $ADLOOKUP_PASSWORD, then a prompt)")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def main(argv: list[str] | None = None, searcher=None) -> int:
    args = build_parser().parse_args(argv)
    env = get_env()
    setup_logging(level="DEBUG" if args.verbose else env.log_level, log_to_file=False)

    password = args.password
    if password is None:
        password = os.environ.get("ADLOOKUP_PASSWORD")
    if password is None and args.username:
        password = getpass.getpass(f"Password for {args.username}: ")

    credential = Credential(args.username, password) if args.username and password is not None else None

    event_logger = DbEventLogger(make_session_factory(get_engine())) if env.event_db else LoggingEventLogger()

    try:
        records = lookup(
            args.identity,
            search_root=args.search_root,
            credential=credential,
            type=args.type,
            filter=args.filter,
            scope=args.scope,
            properties=args.properties,
            searcher=searcher or ADClient(ADConfig.from_env(env)),
            event_logger=event_logger,
            settings=env,
        )
    except DirectorySearchError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    except ADLookupError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    print(json.dumps(records, indent=2, ensure_ascii=False, default=str))
    return 0
