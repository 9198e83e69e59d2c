# mobutil

Small building blocks for tools that drive mobile builds: path helpers,
console prompts, terminal reports, version parsing, link creation and
assembly of `cargo` argument lists.

## Installation

    pip install .

For running the tests:

    pip install ".[test]"
    pytest

## Modules

- `mobutil.paths`: home directory helpers (`home_dir`, `expand_home`,
  `contract_home`), the install locations under `~/.cargo-mobile`
  (`install_dir`, `checkouts_dir`, `tools_dir`), a scratch directory in the
  system temporary directory (`temp_dir`), and path arithmetic
  (`prefix_path`, `unprefix_path`, `relativize_path`, `normalize_path`,
  `under_root`). Failures raise `NoHomeDirError`, `ContractHomeError`,
  `PathNotPrefixedError` or `NormalizationError`.
- `mobutil.prompt`: prompts read from standard input: `minimal`, `default`
  (empty input picks the default), `yes_no` (returns `True`, `False` or
  `None`), `list_display_only` and `choose_from_list`, which asks until a
  valid index is entered. `minimal` raises `EOFError` when input ends.
- `mobutil.cli`: `Report` and `Label` for coloured, wrapped messages
  (errors go to stderr, everything else to stdout), `ReportableError` for
  exceptions that carry a report, `bin_name`, and `run_main`, which calls a
  function with the terminal width and, if it raises `ReportableError`,
  prints the report and exits with the report's exit code (0 for victory,
  1 otherwise).
- `mobutil.versions`: `VersionTriple` and `VersionDouble`, parsed with
  `parse` from `major[.minor][.patch]` strings (missing parts are zero), and
  `RustVersion.parse`, which reads the text printed by `rustc --version`.
  `RustVersion.valid` reports whether a compiler is known to work; only on
  macOS are some releases rejected.
- `mobutil.text`: `list_display`, `reverse_domain`, `prepend_to_path`,
  `format_commit_msg`, `installed_commit_msg`, `get_string_for_group`,
  `one_or_many` and the `working_dir` context manager.
- `mobutil.ln`: link creation with clobbering rules: `LinkCall` with
  `LinkType`, `Clobber` and `TargetStyle`, plus `force_symlink` and
  `force_symlink_relative`. Failures raise `LinkError`, whose `cause` is an
  `ErrorCause`.
- `mobutil.cargo`: `CargoCommand`, an immutable builder whose `with_*`
  methods return copies and whose `to_args` returns the argument list.

## Examples

    from mobutil.versions import VersionTriple, RustVersion
    from mobutil.text import list_display, reverse_domain

    VersionTriple.parse("1.45")          # VersionTriple(major=1, minor=45, patch=0)
    list_display(["a", "b", "c"])        # "a, b, and c"
    reverse_domain("example.com")        # "com.example"

    v = RustVersion.parse("rustc 1.49.0 (e1884a8e3 2020-12-29)")
    str(v)                               # "1.49.0 (e1884a8e3 2020-12-29)"

    from mobutil.cargo import CargoCommand

    args = (
        CargoCommand("build")
        .with_target("aarch64-linux-android")
        .with_release(True)
        .to_args()
    )
    # ["cargo", "build", "--target", "aarch64-linux-android", "--release"]

    from mobutil.cli import Report

    print(Report.victory("Done", "Everything built.").format(80, False))

## What it does not do

The package runs no other programs. `CargoCommand.to_args` only builds the
argument list; running it is up to the caller. `RustVersion.parse` reads
version text it is given rather than invoking the compiler, and there are
no helpers for git, rustup, Gradle or opening an editor. Links are created
directly through the operating system. The package provides no command of
its own and no argument parsing.