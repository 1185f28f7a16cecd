import io

from aidocs.console import CommandError, Console, Options


def test_info_is_silent_unless_verbose():
    stream = io.StringIO()
    Console(verbose=False, stream=stream).info("hidden message")
    assert stream.getvalue() == ""


def test_info_prints_when_verbose():
    stream = io.StringIO()
    Console(verbose=True, stream=stream).info("Doc branch: main")
    assert stream.getvalue() == "Doc branch: main\n"


def test_success_has_check_mark_prefix():
    stream = io.StringIO()
    Console(stream=stream).success("Removed worktree")
    assert stream.getvalue() == "✓ Removed worktree\n"


def test_warning_has_warning_prefix():
    stream = io.StringIO()
    Console(stream=stream).warning("Dry run mode - no changes will be made")
    assert stream.getvalue() == "⚠ Dry run mode - no changes will be made\n"


def test_step_format():
    stream = io.StringIO()
    Console(stream=stream).step(1, 9, "Reading configuration")
    assert stream.getvalue() == "[1/9] Reading configuration\n"


def test_success_and_warning_print_even_when_not_verbose():
    stream = io.StringIO()
    console = Console(verbose=False, stream=stream)
    console.success("a")
    console.warning("b")
    assert stream.getvalue().splitlines() == ["✓ a", "⚠ b"]


def test_options_defaults():
    options = Options()
    assert (options.config_path, options.dry_run, options.verbose, options.force) == (
        "",
        False,
        False,
        False,
    )


def test_command_error_carries_message():
    error = CommandError("not a git repository")
    assert str(error) == "not a git repository"