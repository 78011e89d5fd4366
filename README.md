# iacguard

Building blocks for a scanner of infrastructure-as-code projects (Terraform,
Dockerfiles, Kubernetes manifests, CloudFormation, OpenAPI and Ansible):
platform detection, result and file storage, scan counters, exit-code policy,
logging and console output settings, CPU and memory profiling, and a small
command line.

## Installation

```
pip install .
```

For running the test suite:

```
pip install ".[test]"
pytest
```

## Command line

```
iacguard version
iacguard generate-id
iacguard --help
```

- `version` prints the full product name followed by the version, for
  example `Keeping Infrastructure as Code Secure development`.
- `generate-id` prints a fresh random UUID, handy when writing a new query.

Global options, accepted before or after the command, control logging and
console output:

| Option | Meaning |
| --- | --- |
| `--log-path PATH` | write log messages to a file (an empty path means `info.log` in the working directory) |
| `-l`, `--log-file` | deprecated; write log messages to `info.log` in the working directory |
| `--log-level LEVEL` | one of TRACE, DEBUG, INFO, WARN, ERROR, FATAL (default INFO) |
| `-f`, `--log-format FORMAT` | `pretty` (default) or `json` |
| `-v`, `--verbose` | also write log messages to stdout |
| `-s`, `--silent` | silence stdout (cannot be combined with `--verbose` or `--ci`) |
| `--ci` | show only log messages on the console (cannot be combined with `--verbose`) |
| `--no-color` | disable coloured output |
| `--profiling CPU\|MEM` | log CPU time or memory use; any other non-empty value is an error |

When a command line cannot be parsed or the options are invalid, the error is
printed to stderr and the command exits with status 126.

## Library use

```python
from iacguard.analyzer import analyze, detect_type
from iacguard.tracker import new_tracker
from iacguard.storage import MemoryStorage
from iacguard.exit_handler import ExitPolicy
from iacguard.helpers import word_wrap, file_analyzer, validate_report_formats

types, unwanted = analyze(["./infra"])   # e.g. ["terraform", "kubernetes"], []
print(detect_type("main.tf"))            # "terraform"

tracker = new_tracker(3)                 # preview lines must be between 1 and 30
tracker.track_file_found()

storage = MemoryStorage()
storage.save_vulnerabilities([{"query": "example"}])

policy = ExitPolicy()
policy.set_fail_on(["high", "medium"])
code = policy.results_exit_code({"HIGH": 0, "MEDIUM": 2, "LOW": 1, "INFO": 0})  # 40

print(word_wrap("testing string word wrap", "-", 2))  # "-testing string\r\n-word wrap\r\n"
print(file_analyzer("kics.config"))      # "json", "yaml", "toml" or "hcl"
```

- `analyzer.analyze(paths)` walks the given files and directories and returns
  the platform types found and the `.json` files whose type could not be
  determined. A path that does not exist raises `analyzer.AnalysisError`.
  YAML files that match no other type are taken to be Ansible.
- `tracker.new_tracker(preview_lines)` raises `ValueError` outside 1–30.
- `exit_handler.ExitPolicy` maps result counts to exit codes: HIGH 50,
  MEDIUM 40, LOW 30, INFO 20, and 0 when nothing selected by `set_fail_on`
  was found. `set_ignore` accepts `none`, `all`, `results` or `errors`, and
  `show_error(kind)` tells whether exits of that kind should be reported.
- `helpers.file_analyzer(path)` recognises a configuration file by its
  content and raises `ValueError` for anything else.
- `helpers.ProgressBar` redraws a text progress bar from an iterable of
  increments; `helpers.Printer.print_by_sev` colours text by severity.
- `helpers.get_default_query_path(path)` looks for a query directory next to
  the running program, then under the working directory.
- `printer.OutputSettings` applies the logging and output options listed
  above to the `iacguard` logger; `printer.validate_flags` rejects
  incompatible combinations.
- `metrics.initialize_metrics(metric, ci)` configures the shared
  `metrics.METRIC`, whose `start(location)` / `stop()` log the usage between
  them.

## What this package does not do

There is no `scan` command and no query engine: the package does not parse
infrastructure files, run queries against them or find vulnerabilities.
It writes no reports either; `helpers.list_report_formats` and
`helpers.validate_report_formats` only name and check the report formats
(`json`, `sarif`, `html`, `glsast`, `pdf`). Configuration files are recognised
by `file_analyzer` but not loaded into command options, and no telemetry is
collected.