"""Tests for the installer orchestrator."""

import io

import pytest

from devsetup.installer.orchestrator import InstallerOrchestrator, StepDefinition, resolve_decision
from devsetup.installer.policy import Decision
from devsetup.installer.predicates import PackageRegistered, PathExists
from devsetup.installer.report import StepStatus
from devsetup.installer.steps.common import install_missing


def _recording_action(log, name, error=None):
    def action(ctx):
        log.append(name)
        if error:
            raise error
    return action


class TestDecisions:
    """Test the decide phase."""

    def test_fatal_step_always_runs(self, ctx):
        step = StepDefinition("system-update", "System Update", action=lambda c: None, fatal=True)
        assert resolve_decision(step, ctx, interactive=False, policy={"system-update": Decision.DECLINE})
        assert resolve_decision(step, ctx, interactive=True)

    def test_unprompted_step_follows_policy(self, ctx):
        step = StepDefinition("cleanup", "Cleanup", action=lambda c: None)
        assert resolve_decision(step, ctx, interactive=False, policy={"cleanup": Decision.DECLINE}) is False
        assert resolve_decision(step, ctx, interactive=False, policy={}) is True

    def test_unprompted_step_not_asked(self, ctx):
        ctx.ui.ask = lambda prompt: pytest.fail("unprompted step asked a question")
        step = StepDefinition("cleanup", "Cleanup", action=lambda c: None)
        assert resolve_decision(step, ctx, interactive=True) is True

    @pytest.mark.parametrize("default", [True, False])
    def test_end_of_input_means_default(self, ctx, monkeypatch, default):
        monkeypatch.setattr("sys.stdin", io.StringIO(""))
        step = StepDefinition("go", "Go", action=lambda c: None, prompt="Install Go?", default=default)

        assert resolve_decision(step, ctx, interactive=True) is default

    def test_policy_missing_entry_accepts(self, ctx):
        step = StepDefinition("go", "Go", action=lambda c: None, prompt="Install Go?")
        assert resolve_decision(step, ctx, interactive=False, policy={}) is True
        assert resolve_decision(step, ctx, interactive=False, policy=None) is True

    def test_policy_decline(self, ctx):
        step = StepDefinition("go", "Go", action=lambda c: None, prompt="Install Go?")
        assert resolve_decision(step, ctx, interactive=False, policy={"go": Decision.DECLINE}) is False

    @pytest.mark.parametrize("answer,default,expected", [
        ("y", False, True),
        ("YES", False, True),
        ("n", True, False),
        ("no", True, False),
        ("", True, True),
        ("", False, False),
        ("maybe", True, True),
        ("maybe", False, False),
    ])
    def test_interactive_answers(self, ctx, answer, default, expected):
        prompts = []
        ctx.ui.ask = lambda prompt: prompts.append(prompt) or answer
        step = StepDefinition("go", "Go", action=lambda c: None, prompt="Install Go?", default=default)

        assert resolve_decision(step, ctx, interactive=True) is expected
        assert "Install Go?" in prompts[0]
        assert ("Y/n" if default else "y/N") in prompts[0]


class TestRun:
    """Test step execution and outcome recording."""

    def test_declined_step_never_acts(self, ctx):
        log = []
        orchestrator = InstallerOrchestrator(ctx)
        orchestrator.add_step("rust", "Rust", _recording_action(log, "rust"), prompt="Install Rust?")

        report = orchestrator.run(interactive=False, policy={"rust": Decision.DECLINE})

        assert log == []
        assert report.status_of("rust") == StepStatus.SKIPPED
        assert report.get("rust").reason == "declined"

    def test_interactive_decline_never_acts(self, ctx):
        log = []
        ctx.ui.ask = lambda prompt: "n"
        orchestrator = InstallerOrchestrator(ctx)
        orchestrator.add_step("rust", "Rust", _recording_action(log, "rust"), prompt="Install Rust?")

        report = orchestrator.run(interactive=True)

        assert log == []
        assert report.status_of("rust") == StepStatus.SKIPPED

    def test_declined_cleanup_never_acts(self, ctx, package_manager):
        from devsetup.installer.steps.system import cleanup

        orchestrator = InstallerOrchestrator(ctx)
        orchestrator.add_step("cleanup", "Cleanup", cleanup)

        report = orchestrator.run(interactive=False, policy={"cleanup": Decision.DECLINE})

        assert package_manager.calls == []
        assert report.get("cleanup").reason == "declined"

    def test_closed_input_keeps_running(self, ctx, monkeypatch):
        monkeypatch.setattr("sys.stdin", io.StringIO(""))
        log = []
        orchestrator = InstallerOrchestrator(ctx)
        orchestrator.add_step("a", "Step A", _recording_action(log, "a"), prompt="A?")
        orchestrator.add_step("b", "Step B", _recording_action(log, "b"), prompt="B?", default=False)
        orchestrator.add_step("c", "Step C", _recording_action(log, "c"))

        report = orchestrator.run(interactive=True)

        assert log == ["a", "c"]
        assert report.status_of("b") == StepStatus.SKIPPED

    def test_step_header_shows_total(self, ctx, output):
        orchestrator = InstallerOrchestrator(ctx)
        orchestrator.add_step("a", "Step A", lambda c: None)
        orchestrator.add_step("b", "Step B", lambda c: None)

        orchestrator.run(interactive=False)

        assert "Step 2/2: Step B" in output.getvalue()

    def test_satisfied_predicate_skips_action(self, ctx, home):
        (home / ".oh-my-zsh").mkdir()
        log = []
        orchestrator = InstallerOrchestrator(ctx)
        orchestrator.add_step(
            "omz", "Oh My Zsh", _recording_action(log, "omz"),
            prompt="Install?", predicate=PathExists("~/.oh-my-zsh"),
        )

        report = orchestrator.run(interactive=False)

        assert log == []
        assert report.status_of("omz") == StepStatus.SKIPPED
        assert report.get("omz").reason == "already satisfied"

    def test_unsatisfied_predicate_runs_action(self, ctx):
        log = []
        orchestrator = InstallerOrchestrator(ctx)
        orchestrator.add_step(
            "omz", "Oh My Zsh", _recording_action(log, "omz"),
            prompt="Install?", predicate=PathExists("~/.oh-my-zsh"),
        )

        report = orchestrator.run(interactive=False)

        assert log == ["omz"]
        assert report.status_of("omz") == StepStatus.SUCCESS

    def test_failure_does_not_stop_next_step(self, ctx, output):
        log = []
        orchestrator = InstallerOrchestrator(ctx)
        orchestrator.add_step("a", "Step A", _recording_action(log, "a", RuntimeError("boom")), prompt="A?")
        orchestrator.add_step("b", "Step B", _recording_action(log, "b"), prompt="B?")

        report = orchestrator.run(interactive=False)

        assert log == ["a", "b"]
        assert report.status_of("a") == StepStatus.FAILED
        assert report.get("a").reason == "boom"
        assert report.status_of("b") == StepStatus.SUCCESS
        assert "[ERROR] Step A failed: boom" in output.getvalue()

    def test_predicate_error_is_step_failure(self, ctx, package_manager):
        def broken(package):
            raise OSError("dpkg-query missing")
        package_manager.is_installed = broken

        orchestrator = InstallerOrchestrator(ctx)
        orchestrator.add_step("lua", "Lua", lambda c: None, prompt="Lua?",
                              predicate=PackageRegistered("lua5.4"))
        orchestrator.add_step("next", "Next", lambda c: None, prompt="Next?")

        report = orchestrator.run(interactive=False)

        assert report.status_of("lua") == StepStatus.FAILED
        assert report.status_of("next") == StepStatus.SUCCESS

    def test_fatal_step_short_circuits(self, ctx, package_manager):
        from devsetup.installer.exceptions import FatalPrerequisiteError
        from devsetup.installer.steps.system import update_system

        package_manager.fail_update = True
        log = []
        orchestrator = InstallerOrchestrator(ctx)
        orchestrator.add_step("system-update", "System Update", update_system, fatal=True)
        orchestrator.add_step("b", "Step B", _recording_action(log, "b"), prompt="B?")
        orchestrator.add_step("c", "Step C", _recording_action(log, "c"))

        with pytest.raises(FatalPrerequisiteError) as exc_info:
            orchestrator.run(interactive=False)

        assert log == []
        assert exc_info.value.step == "system-update"
        assert ("upgrade",) not in package_manager.calls

    def test_keyboard_interrupt_propagates(self, ctx):
        def interrupted(c):
            raise KeyboardInterrupt

        orchestrator = InstallerOrchestrator(ctx)
        orchestrator.add_step("a", "Step A", interrupted, prompt="A?")

        with pytest.raises(KeyboardInterrupt):
            orchestrator.run(interactive=False)

    def test_report_preserves_declaration_order(self, ctx):
        orchestrator = InstallerOrchestrator(ctx)
        for name in ("one", "two", "three"):
            orchestrator.add_step(name, name.title(), lambda c: None, prompt=f"{name}?")

        report = orchestrator.run(interactive=False, policy={"two": Decision.DECLINE})

        assert [o.name for o in report.outcomes] == ["one", "two", "three"]
        assert report.counts() == {"success": 2, "skipped": 1, "failed": 0}

    def test_duplicate_step_name_rejected(self, ctx):
        orchestrator = InstallerOrchestrator(ctx)
        orchestrator.add_step("go", "Go", lambda c: None)
        with pytest.raises(ValueError):
            orchestrator.add_step("go", "Go again", lambda c: None)


class TestIdempotence:
    """Running twice skips whatever the first run satisfied."""

    def test_second_run_skips_satisfied_steps(self, ctx, package_manager):
        orchestrator = InstallerOrchestrator(ctx)
        orchestrator.add_step(
            "lua", "Lua", lambda c: install_missing(c, ["lua5.4", "luajit"]),
            prompt="Install Lua?", predicate=PackageRegistered("lua5.4", "luajit"),
        )
        orchestrator.add_step(
            "marker", "Marker", lambda c: c.expand("~/.marker").touch(),
            prompt="Marker?", predicate=PathExists("~/.marker"),
        )

        first = orchestrator.run(interactive=False)
        second = orchestrator.run(interactive=False)

        assert [o.status for o in first.outcomes] == [StepStatus.SUCCESS, StepStatus.SUCCESS]
        assert [o.status for o in second.outcomes] == [StepStatus.SKIPPED, StepStatus.SKIPPED]
        assert len(package_manager.install_calls) == 1

    def test_registered_package_issues_no_install(self, ctx, package_manager):
        package_manager.installed.add("jq")
        orchestrator = InstallerOrchestrator(ctx)
        orchestrator.add_step(
            "jq", "jq", lambda c: install_missing(c, ["jq"]),
            prompt="Install jq?", predicate=PackageRegistered("jq"),
        )

        report = orchestrator.run(interactive=False)

        assert report.status_of("jq") == StepStatus.SKIPPED
        assert package_manager.install_calls == []

    def test_profile_export_appended_once(self, ctx, home):
        bashrc = home / ".bashrc"
        bashrc.write_text("")
        line = "export PATH=$PATH:/opt/tool/bin"

        def export_path(c):
            c.ensure_profile_line(line, marker="/opt/tool/bin")
            c.append_path("/opt/tool/bin")

        orchestrator = InstallerOrchestrator(ctx)
        orchestrator.add_step("tool", "Tool", export_path, prompt="Tool?")

        orchestrator.run(interactive=False)
        assert bashrc.read_text().splitlines() == [line]

        orchestrator.run(interactive=False)
        assert bashrc.read_text().splitlines() == [line]
        assert ctx.env["PATH"].split(":").count("/opt/tool/bin") == 1


class TestCheck:
    """Test predicate evaluation without acting."""

    def test_check_reports_each_step(self, ctx, package_manager):
        package_manager.installed.add("jq")
        log = []
        orchestrator = InstallerOrchestrator(ctx)
        orchestrator.add_step("jq", "jq", _recording_action(log, "jq"), predicate=PackageRegistered("jq"))
        orchestrator.add_step("fd", "fd", _recording_action(log, "fd"), predicate=PackageRegistered("fd-find"))
        orchestrator.add_step("zsh", "Zsh", _recording_action(log, "zsh"))

        assert orchestrator.check() == {"jq": True, "fd": False, "zsh": None}
        assert log == []
