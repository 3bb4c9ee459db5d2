"""CLI commands for Kit."""

from kit.cli.commands.init import init_cmd
from kit.cli.commands.add import add_cmd
from kit.cli.commands.commit import commit_cmd
from kit.cli.commands.log import log_cmd
from kit.cli.commands.branch import branch_cmd
from kit.cli.commands.tag import tag_cmd
from kit.cli.commands.refs import show_ref_cmd
from kit.cli.commands.objects import cat_object_cmd, count_objects_cmd, fsck_cmd
from kit.cli.commands.clone import clone_cmd
from kit.cli.commands.push import push_cmd
from kit.cli.commands.pull import pull_cmd
from kit.cli.commands.remote import remote_cmd

__all__ = ['init_cmd', 'add_cmd', 'commit_cmd', 'log_cmd', 'branch_cmd', 'tag_cmd',
           'show_ref_cmd', 'cat_object_cmd', 'count_objects_cmd', 'fsck_cmd',
           'clone_cmd', 'push_cmd', 'pull_cmd', 'remote_cmd']
