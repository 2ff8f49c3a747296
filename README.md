# taskkit

Building blocks for a task runner: ordered variables, command-line parsing,
output styles, checks that decide whether a task is up to date, shell command
execution, task listings and summaries, plus two small helper commands.

## Installation

```
pip install taskkit
```

For running the test suite:

```
pip install "taskkit[test]"
pytest
```

## Modules

- `taskkit.errors` – exceptions for the failures a runner reports, all derived
  from `TaskError`. Each carries a `code` used as a process exit code (for
  example `TaskNotFoundError` is 200, `TaskfileVersionCheckError` is 107).
  `TaskRunError.task_exit_code()` returns the failed command's own exit status
  when the wrapped error has one, otherwise 201.
- `taskkit.omap` – `OrderedMap`, a mapping that keeps an explicit key order.
  It offers `set`, `get`, `exists`, `sort`, `sort_func`, `keys`, `values`,
  `items`, `merge`, `deep_copy`, and the constructors `from_map`,
  `from_map_with_order` and `from_yaml` (which keeps the YAML key order).
- `taskkit.args` – `parse(*args)` splits command-line words into task calls
  (`Call`) and `NAME=value` variables.
- `taskkit.output` – output styles `Interleaved`, `Group` and `Prefixed`, each
  with `wrap_writer(stdout, stderr, prefix, templater)` returning two writers
  and a close function. `build_for(name, group_begin, group_end,
  group_error_only)` picks one by name and raises `ValueError` for unknown
  names or group options on non-group styles.
- `taskkit.logger` – `Logger` with `outf`, `foutf`, `errf`, verbose variants
  and `prompt`; `Color` for ANSI colours (overridable with `TASK_COLOR_*`
  variables); `is_terminal()`.
- `taskkit.task_sort` – task orderings `Noop`, `AlphaNumeric` and
  `AlphaNumericWithRootTasksFirst`, each sorting a list in place.
- `taskkit.summary` – `print_task` and `print_tasks` write a readable summary
  of a task: name, summary or description, dependencies, aliases, commands.
- `taskkit.listing` – `ListOptions` (with `should_list_tasks` and `validate`),
  `list_task_names` and `init_taskfile`, which writes a starter
  `Taskfile.yml` and raises `TaskfileAlreadyExistsError` if one exists.
- `taskkit.editors` – `EditorTaskfile`, `EditorTask` and `Location` with
  `to_dict` / `to_json` for editor integrations.
- `taskkit.execext` – `run_command` runs a command in `bash` (or `sh`) with
  errexit set and raises `ExitStatusError` on a non-zero exit; `expand`
  expands variables and a leading `~`.
- `taskkit.env` – `task_environ` builds a task's environment; `environ_vars`
  returns the process environment as an `OrderedMap`.
- `taskkit.globbing` – `glob` and `globs` match source and generated files,
  with support for negated patterns.
- `taskkit.sources`, `taskkit.status`, `taskkit.uptodate` – `ChecksumChecker`,
  `TimestampChecker`, `NoneChecker` (built by `new_sources_checker`) and
  `StatusChecker`, combined by `is_task_up_to_date`.
- `taskkit.hashing` – run-mode hashes (`always`, `once`, `when_changed`) via
  `get_hash`.
- `taskkit.concurrency` – `ConcurrencyLimiter` to cap how many tasks hold a
  slot at once.
- `taskkit.preconditions` – `check_preconditions` runs a task's precondition
  commands and raises `PreconditionFailedError` on the first failure.
- `taskkit.experiments` – experiment switches read from `TASK_X_*`
  environment variables and a `.env` file (`load_experiments`,
  `list_experiments`).
- `taskkit.flags` – `parse_flags` parses the runner's command-line options
  into `Flags`; `Flags.validate` rejects incompatible combinations.
- `taskkit.signals` – `intercept_interrupt_signals` logs the first two
  SIGINT/SIGTERM signals and exits on the third.
- `taskkit.filepathext`, `taskkit.slicesext`, `taskkit.goext`,
  `taskkit.version` – small path, sequence, platform-name and version helpers.

## Example

```python
from taskkit.args import parse
from taskkit.omap import OrderedMap

calls, variables = parse("build", "GOOS=linux", "test")
print([call.task for call in calls])   # ['build', 'test']
print(variables.keys())                # ['GOOS']

m = OrderedMap.from_yaml("b: 2\na: 1\n")
m.sort()
print(m.keys())                        # ['a', 'b']
```

## Commands

`sleepit` sleeps for a while and optionally handles interrupts; it is useful
for testing how a runner forwards signals to its children:

```
sleepit default -sleep=2s
sleepit handle -sleep=10s -cleanup=1s -term-after=2
sleepit version
```

Exit codes: 0 when the work finished, 3 when cleanup finished after an
interrupt, 4 when terminated after the given number of interrupts, 2 on a
usage error.

`taskkit-release` takes the version of the latest git tag, bumps it
(`major`, `minor`, `patch` or an explicit version), replaces `## Unreleased`
in `CHANGELOG.md` with the new version and date, copies the changelog to
`docs/docs/changelog.md` under that file's frontmatter, and updates the
version in `package.json` and `package-lock.json`:

```
taskkit-release patch
```

## What is not included

There is no `task` command and no executor: the package does not read or
compile Taskfiles, render templates, resolve task dependencies, run tasks end
to end or watch files for changes. `parse_flags` parses the runner's options,
but nothing in the package acts on them beyond `Flags.validate`.