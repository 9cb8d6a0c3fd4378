#!/usr/bin/env python3
"""
Neon Test Branch Manager

Inspect and clean up the short-lived Neon branches created for tests.
"""

import sys
import argparse
import time
from neontestdb.client import Client
from neontestdb.utils.config import Config
from neontestdb.utils.progress import ProgressTracker
from neontestdb.utils.errors import ConfigurationError, NeonTestDBError

def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description='Neon Test Branch Manager - Create, list and clean up test branches'
    )
    parser.add_argument('--env-file', default='.env', help='Path to environment file (default: .env)')
    parser.add_argument('--base-url', help='Neon API base URL')
    parser.add_argument('--api-key', help='Neon API key')
    parser.add_argument('--project-id', help='Neon project ID')
    parser.add_argument('--parent-branch', help='Branch new branches are created from (default: main)')
    parser.add_argument('--debug', action='store_true', help='Enable debug output')
    parser.add_argument('--debug-log', help='Append debug output to this file')

    commands = parser.add_subparsers(dest='command', required=True)
    commands.add_parser('list', help='List branches in the project')

    create = commands.add_parser('create', help='Create (or replace) a branch and print its connection URI')
    create.add_argument('name', help='Branch name')

    delete = commands.add_parser('delete', help='Delete a branch by name')
    delete.add_argument('name', help='Branch name')

    prune = commands.add_parser('prune', help='Delete test branches left behind by earlier runs')
    prune.add_argument('--prefix', help="Branch name prefix (default: '<hostname>.')")

    return parser.parse_args(argv)

def list_branches(client):
    branches = client.get_branches()
    if not branches:
        print("No branches found.")
        return

    print(f"{'ID':<28} {'NAME':<48} {'STATE':<8} PARENT")
    for branch in branches:
        marker = ' *' if branch.name == client.config.parent_branch else ''
        print(f"{branch.id:<28} {branch.name + marker:<48} {branch.current_state or '':<8} {branch.parent_id or ''}")
    print(f"\n{len(branches)} branches")

def create_branch(client, name):
    created = client.forced_create_branch(name)
    print(f"✓ Created branch {created.branch.name} ({created.branch.id})")
    for operation in created.operations:
        print(f"  - {operation.action}: {operation.status}")
    print(created.connection_uri.connection_uri)

def delete_branch(client, name):
    if name == client.config.parent_branch:
        print(f"Refusing to delete the parent branch '{name}'")
        sys.exit(1)
    branch = client.get_branch_by_name(name)
    if branch is None:
        print(f"Branch not found: {name}")
        sys.exit(1)
    client.delete_branch(branch.id)
    print(f"✓ Deleted branch {name} ({branch.id})")

def prune_branches(client, prefix):
    start_time = time.time()
    deleted = client.prune_branches(prefix)
    for branch in deleted:
        print(f"  - {branch.name} ({branch.id})")
    print(f"✓ Deleted {len(deleted)} branches in {time.time() - start_time:.1f}s")

def main(argv=None):
    """Main entry point."""
    args = parse_args(argv)

    try:
        config = Config.from_args(args, Config.from_env(args.env_file))
    except ConfigurationError as e:
        print(f"Configuration error: {e}")
        sys.exit(1)

    is_valid, error = config.validate()
    if not is_valid:
        print(f"Configuration error: {error}")
        sys.exit(1)

    client = Client(config, progress=ProgressTracker(enabled=args.command == 'prune'))

    try:
        if args.command == 'list':
            list_branches(client)
        elif args.command == 'create':
            create_branch(client, args.name)
        elif args.command == 'delete':
            delete_branch(client, args.name)
        elif args.command == 'prune':
            prune_branches(client, args.prefix)
    except KeyboardInterrupt:
        print("\n\nOperation cancelled by user.")
        client.logger.log("INTERRUPTED: Operation cancelled by user")
        sys.exit(1)
    except NeonTestDBError as e:
        print(f"\nError: {e}")
        client.logger.log(f"FATAL ERROR: {e}")
        sys.exit(1)
    finally:
        client.logger.close()

if __name__ == "__main__":
    main()
