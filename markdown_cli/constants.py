"""CLI constants and help text."""

from prompt_toolkit.styles import Style

COMMANDS = ["upload", "download", "edit", "list", "delete", "rename", "health", "shell"]
SHELL_BUILTINS = ["help", "clear", "exit"]

# Commands whose first argument is a remote file name
REMOTE_NAME_COMMANDS = ("download", "edit", "delete", "rename")
# Commands that change the remote file list
MUTATING_COMMANDS = ("upload", "edit", "delete", "rename")

DEFAULT_EDITOR = "vim"

TABLE_WIDTH = 80
ID_COLUMN_WIDTH = 36
NAME_COLUMN_WIDTH = 30
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

STYLE = Style.from_dict(
    {
        "prompt": "#5f87d7 bold",
    }
)

PROMPT_TEXT = "markdown> "

WELCOME_TITLE = "markdown-cli shell"
WELCOME_HELP = "Type 'help' for commands or 'exit' to quit.\n"

USAGE = """markdown-cli - CLI for the mutable markdown storage service

Usage: markdown-cli [options] <command> [args]

Commands:
  upload <file>               Upload a local markdown file to the service
  download <name>             Download a file by name to current directory
  edit <name>                 Edit a file using $EDITOR (default: vim)
  list                        List all files in the service
  delete <name>               Delete a file by name
  rename <name> <new-name>    Rename a file
  health                      Check server health
  shell                       Start an interactive session

Server URL formats:
  url://markdown/             URL protocol (P2P, default)
  http://localhost:8080       HTTP (for local testing)

Options:
  -s, --server <url>          Server URL (default: url://markdown/)
  -o, --output <path>         Output path for download
      --debug                 Log debug output to stderr
  -h, --help                  Show help"""

SHELL_HELP_TEXT = """Available commands:
  upload <file>                      Upload a local markdown file
  download <name> [-o <path>]        Download a file by name
  edit <name>                        Edit a file in $EDITOR
  list                               List all files
  delete <name>                      Delete a file by name
  rename <name> <new-name>           Rename a file
  health                             Check server health
  clear                              Clear screen
  help                               Show this help
  exit                               Leave the shell"""
