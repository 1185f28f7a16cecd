# aidocs

`ai-docs` keeps the "memory" files that AI coding agents write out of your main
history. Examples are `CLAUDE.md`, `GEMINI.md`, `memory-bank/` and
`.cursor/rules`. The tool commits these files to a dedicated orphan Git branch
and checks that branch out as a worktree. You can then push the files to
`origin` and pull them back into your project.

## Installation

```
pip install .
```

This installs the `ai-docs` command. The command runs `git`, so `git` must be on
your `PATH`. Run the command from the root of the repository, the directory
that holds `.git`.

## Configuration

By default `ai-docs` reads `.ai-docs.config.yml` in the current directory. Use
`--config` to read another file. The format follows the file extension:
`.yml` and `.yaml` are YAML, `.json` is JSON and `.toml` is TOML. Any other
extension is an error.

If no config file exists, `ai-docs init` writes a sample file and stops. Edit
it, then run `init` again. The sample looks like this:

```yaml
userName: ""
mainBranchName: "main"

docBranchNameTemplate: "@ai-docs/{userName}"
docWorktreeDir: ".ai-docs"

aIAgentMemoryContextPath:
  Cline: "memory-bank"
  Claude: "CLAUDE.md"
  Gemini: "GEMINI.md"
  Cursor: ".cursor/rules"

ignorePatterns:
  - "memory-bank"
  - "CLAUDE.md"
  - "GEMINI.md"
  - ".cursor"
```

A key left out of the file takes its built-in default:

| Key | Default |
| --- | --- |
| `mainBranchName` | `main` |
| `docBranchNameTemplate` | `@doc/{userName}` |
| `docWorktreeDir` | `.mem` |
| `aIAgentMemoryContextPath` | `Cline: memory-bank`, `Claude: .ai-memory`, `Gemini: .gemini/context`, `Cursor: .cursor/rules` |
| `ignorePatterns` | `/memory-bank/`, `/.ai-memory/`, `/.gemini/context/`, `/.cursor/rules/` |
| `docDir` | `docs/ai` |

Entries in `aIAgentMemoryContextPath` are merged into the defaults. A name you
give replaces its default path. A default name you do not give stays in the
map. `ignorePatterns` replaces the default list as a whole.

If `userName` is empty, the name comes from `git config user.name`. If that is
empty, the output of `whoami` is used, and failing that, `user`. This name
replaces `{userName}` in `docBranchNameTemplate` to give the docs branch name.

## Usage

```
ai-docs init                 # create the docs branch, .gitignore entries and worktree
ai-docs init --force         # recreate an existing docs branch or worktree
ai-docs push                 # copy memory files into the worktree, commit, push
ai-docs pull                 # pull the docs branch, copy its files into the project
ai-docs pull --overwrite     # also replace local files that already exist
ai-docs clean                # remove the worktree and delete the docs branch
```

You can give these options before or after the subcommand name:

- `--config PATH`: the config file to read (default `.ai-docs.config.yml`)
- `--dry-run`: run the checks and report, without making changes
- `-v`, `--verbose`: print more detailed progress

### init

`init` checks three things:

- The main branch exists.
- The docs branch does not exist yet. With `--force` it may exist.
- The worktree directory does not exist yet. With `--force` it may exist, and
  `init` removes it.

`init` then does the following:

1. Creates the docs branch as an orphan branch.
2. Stages every configured memory path that exists.
3. Makes the commit "Initial AI docs commit".
4. Pushes the branch to `origin`, trying up to three times. If the push fails,
   `init` only prints a warning.
5. Switches back to the main branch, or to the branch you were on before.
6. Appends each ignore pattern and the worktree directory to `.gitignore`,
   unless the line is already there.
7. Adds the worktree.

### push

`push` copies each configured memory path from the project into the worktree
and stages everything there. If there are changes, it commits them with the
message `Update AI docs YYYY-MM-DD_HH:MM:SS` and pushes the branch to `origin`.
It tries the push up to three times and waits a little longer before each
retry.

### pull

`pull` runs `git pull` in the worktree. A failed pull is only a warning. It
then copies each configured memory path from the worktree into the project. A
local file that already exists is skipped unless you give `--overwrite`.

### clean

`clean` first asks for confirmation (`y` or `yes`). It then does the following:

1. Removes any symlinks found at the configured memory paths.
2. Removes the worktree. If `git worktree remove` fails, it deletes the
   directory itself.
3. Deletes the docs branch locally, switching to the main branch first if the
   docs branch is checked out.
4. Deletes the docs branch on `origin`. A failure here is only a warning.

With `--dry-run`, `clean` asks for confirmation first and then only lists what
it would remove.

If any command fails, it prints `Error: <message>` in red and exits with
status 1.

## Using it as a library

The building blocks are also available for use from Python.

`aidocs.config`:

- `load_config(path)` returns a `Config`. It raises `ConfigError` if the file
  cannot be read or parsed.
- `Config.doc_branch_name()` returns the docs branch name with the user name
  filled in.

`aidocs.git`:

- `run_git` runs a git command. `run_git_output` runs one and returns its
  output.
- Other helpers: `branch_exists`, `current_branch`, `push_with_retry`,
  `is_git_repo` and `has_uncommitted_changes`.
- A failed git command raises `GitError`.

`aidocs.fileutils`:

- Copying: `copy_path` and `copy_dir`.
- Line edits: `file_contains` and `append_to_file`.
- Links: `ensure_symlink` and `ensure_symlink_if_exists`. On Windows these
  create a directory junction.
- Other helpers: `path_exists` and `clean_all_except_ai_paths`.

The commands themselves are `run_init`, `run_push`, `run_pull` and `run_clean`,
in `aidocs.commands`. They take an `Options` and a `Console` from
`aidocs.console` and raise `CommandError` on failure.

## What it does not do

- `init` does not create symlinks from the project to the worktree. Files move
  between the two only when you run `push` and `pull`, which copy them.
- `clean` has no `--force` flag, so it always asks for confirmation.
- Files are never merged. `pull --overwrite` replaces local copies, and `push`
  replaces the copies in the worktree.

## Development

```
pip install -e ".[test]"
pytest
```