# gokazi

A small command-line process manager. You describe tasks in a YAML file.
gokazi then looks for them among the running processes and shows their
state, or stops them.

## Installation

```
pip install gokazi
```

## Configuration

By default gokazi reads `gokazi.yaml` from the current directory. The file
must declare version `1.0`. Any other version, or none, is an error:

```yaml
version: "1.0"
tasks:
  web:
    name: python3
    description: Local development server
    path: $HOME/.venv/bin
    cwd: $HOME/projects/site
    args:
      - -m
      - http.server
```

A task is identified by its process `name`. Three fields are optional and
narrow the match:

- `path` is the directory that holds the executable.
- `cwd` is the working directory of the process.
- `args` lists the command-line arguments. When it is given, every argument
  after the program name must be one of the listed ones.

Environment variables (`$VAR` or `${VAR}`) in `path`, `cwd` and `args` are
expanded. Variables that are not set expand to an empty string.

## Usage

```
gokazi list                 # show every configured task, its pid and whether it runs
gokazi stop web             # kill the process that matches task "web"
gokazi config               # print the merged configuration as YAML
gokazi version              # print the version
```

`list` prints JSON and `config` prints YAML. Both are syntax-highlighted
when standard output is a terminal. `stop` kills the matching process and
waits up to five seconds for it to exit. It fails if the task is not
configured or not running.

`list`, `stop` and `config` take `-c/--config`. You can give it more than
once, and one value may hold several comma-separated files. The files are
merged in the order given. A file of `-` reads the configuration from
standard input:

```
gokazi list -c base.yaml -c local.yaml
cat gokazi.yaml | gokazi list -c -
```

`--debug` turns on debug messages. If the `GOKAZI_SCOPE` environment
variable is set, its value is shown in parentheses after the level symbol of
each log line. On error gokazi logs the reason and exits with status 1.

## What it does not do

gokazi only inspects and stops processes. It does not start tasks,
restart them or keep them running.

## Library use

```python
from gokazi.loader import load_config
from gokazi.log import new_logger
from gokazi.manager import Gokazi

logger = new_logger()
config = load_config(["gokazi.yaml"], None, logger)

manager = Gokazi(logger)
for task_id, task in config.tasks.items():
    manager.add(task_id, task)

for task_id, status in manager.list().items():
    print(task_id, status.running, status.pid)
```

`Gokazi.find(task_id)` returns the `TaskStatus` of a single task.
`Gokazi.stop(task_id)` kills the process of a task. Failures raise
`TaskNotFoundError`, `TaskNotRunningError` or another `GokaziError`.
Configuration problems raise `gokazi.loader.ConfigError`.