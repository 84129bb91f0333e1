import io
import subprocess
import unittest
from unittest.mock import patch, MagicMock

import ffiprep.compilers
import ffiprep.discovery as discovery
from ffiprep.discovery import CompilerCandidate

ENV = ("/usr/bin/env",)

FALLBACKS = [
    CompilerCandidate(ENV + ("cc",), "gcc"),
    CompilerCandidate(ENV + ("gcc",), "gcc"),
    CompilerCandidate(ENV + ("gcc-4.9",), "gcc"),
    CompilerCandidate(ENV + ("gcc-4.8",), "gcc"),
    CompilerCandidate(ENV + ("gcc-4.7",), "gcc"),
    CompilerCandidate(ENV + ("clang",), "clang"),
    CompilerCandidate(ENV + ("icc",), "gcc"),
]


def _exited(returncode):
    result = MagicMock()
    result.returncode = returncode
    return result


def _fake_host(installed, broken=()):
    """ A subprocess.run replacement for a host with the given compilers.
        The broken ones start but fail their version query.
    """
    calls = []

    def run(cmd, **kwargs):
        calls.append(list(cmd))
        name = cmd[1] if cmd[0] == "/usr/bin/env" else cmd[0]
        if name in broken:
            return _exited(1)
        if name in installed:
            return _exited(0)
        # /usr/bin/env reports a missing program with 127
        if cmd[0] == "/usr/bin/env":
            return _exited(127)
        raise FileNotFoundError(name)

    return run, calls


class TestCandidates(unittest.TestCase):
    def test_fallbacks_only(self):
        self.assertEqual(FALLBACKS, discovery.candidates(environ={}, platform="linux"))

    def test_environment_override_comes_first(self):
        result = discovery.candidates(environ={"CC": "tcc"}, platform="linux")
        self.assertEqual(CompilerCandidate(ENV + ("tcc",), "gcc"), result[0])
        self.assertEqual(FALLBACKS, result[1:])

    def test_environment_override_with_wrapper(self):
        result = discovery.candidates(environ={"CC": "ccache gcc"}, platform="darwin")
        self.assertEqual(CompilerCandidate(ENV + ("ccache", "gcc"), "gcc"), result[0])

    def test_empty_environment_variable_is_ignored(self):
        self.assertEqual(FALLBACKS, discovery.candidates(environ={"CC": ""}, platform="linux"))

    def test_explicit_override_beats_environment(self):
        result = discovery.candidates(override="clang-15", environ={"CC": "tcc"}, platform="linux")
        self.assertEqual(CompilerCandidate(ENV + ("clang-15",), "gcc"), result[0])
        self.assertEqual(FALLBACKS, result[1:])

    def test_windows(self):
        result = discovery.candidates(environ={"CC": "gcc"}, platform="win32")
        self.assertEqual(
            [CompilerCandidate(("gcc",), "gcc"), CompilerCandidate(("cl",), "msvc")],
            result[:2],
        )
        self.assertEqual([CompilerCandidate((cc.path[-1],), cc.kind) for cc in FALLBACKS], result[2:])

    def test_candidates_are_immutable(self):
        candidate = discovery.candidates(environ={}, platform="linux")[0]
        with self.assertRaises(AttributeError):
            candidate.kind = "clang"


class TestProbe(unittest.TestCase):
    def test_version_flags_follow_kind(self):
        with patch("subprocess.run", return_value=_exited(0)) as run:
            self.assertTrue(discovery.probe(CompilerCandidate(("gcc",), "gcc")))
            self.assertEqual(["gcc", "-v"], run.call_args[0][0])
            self.assertTrue(discovery.probe(CompilerCandidate(("cl",), "msvc")))
            self.assertEqual(["cl"], run.call_args[0][0])
        self.assertEqual(subprocess.DEVNULL, run.call_args[1]["stdout"])

    def test_cannot_start(self):
        with patch("subprocess.run", side_effect=FileNotFoundError("gcc")):
            self.assertFalse(discovery.probe(CompilerCandidate(("gcc",), "gcc")))
            self.assertFalse(discovery.probe(CompilerCandidate(("gcc",), "gcc"), check_exit_status=False))

    def test_exit_status_policy(self):
        candidate = CompilerCandidate(ENV + ("gcc",), "gcc")
        with patch("subprocess.run", return_value=_exited(127)):
            self.assertFalse(discovery.probe(candidate))
            # Without the check, anything that starts is accepted
            self.assertTrue(discovery.probe(candidate, check_exit_status=False))


class TestFindBestCC(unittest.TestCase):
    def test_first_working_candidate_wins(self):
        run, calls = _fake_host(installed=["gcc", "clang"])
        with patch("subprocess.run", side_effect=run):
            cc = discovery.find_best_cc(discovery.candidates(environ={}, platform="linux"))
        self.assertIsInstance(cc, ffiprep.compilers.GccCompiler)
        self.assertEqual(ENV + ("gcc",), cc.path)
        # Stops at the first success
        self.assertEqual([list(ENV) + ["cc", "-v"], list(ENV) + ["gcc", "-v"]], calls)

    def test_environment_override_preferred(self):
        run, calls = _fake_host(installed=["cc", "gcc", "my-gcc"])
        with patch("subprocess.run", side_effect=run):
            cc = discovery.find_best_cc(discovery.candidates(environ={"CC": "my-gcc"}, platform="linux"))
        self.assertEqual(ENV + ("my-gcc",), cc.path)
        self.assertEqual(1, len(calls))

    def test_clang_gets_clang_kind(self):
        run, calls = _fake_host(installed=["clang"])
        with patch("subprocess.run", side_effect=run):
            cc = discovery.find_best_cc(discovery.candidates(environ={}, platform="linux"))
        self.assertIsInstance(cc, ffiprep.compilers.ClangCompiler)

    def test_windows_msvc(self):
        run, calls = _fake_host(installed=["cl"])
        with patch("subprocess.run", side_effect=run):
            cc = discovery.find_best_cc(discovery.candidates(environ={}, platform="win32"))
        self.assertIsInstance(cc, ffiprep.compilers.MsvcCompiler)
        self.assertEqual(["cl"], calls[0])

    def test_broken_compiler_skipped_by_default(self):
        run, calls = _fake_host(installed=["gcc"], broken=["my-gcc"])
        with patch("subprocess.run", side_effect=run):
            cc = discovery.find_best_cc(discovery.candidates(environ={"CC": "my-gcc"}, platform="linux"))
        self.assertEqual(ENV + ("gcc",), cc.path)

    def test_broken_compiler_accepted_without_exit_status_check(self):
        run, calls = _fake_host(installed=["gcc"], broken=["my-gcc"])
        with patch("subprocess.run", side_effect=run):
            cc = discovery.find_best_cc(
                discovery.candidates(environ={"CC": "my-gcc"}, platform="linux"),
                check_exit_status=False,
            )
        self.assertEqual(ENV + ("my-gcc",), cc.path)

    def test_nothing_found(self):
        run, calls = _fake_host(installed=[])
        with patch("subprocess.run", side_effect=run), patch("sys.stderr", io.StringIO()):
            self.assertIsNone(discovery.find_best_cc(discovery.candidates(environ={}, platform="linux")))
        self.assertEqual(len(FALLBACKS), len(calls))

    def test_settings_passed_to_compiler(self):
        run, calls = _fake_host(installed=["cc"])
        with patch("subprocess.run", side_effect=run):
            cc = discovery.find_best_cc(discovery.candidates(environ={}, platform="linux"), attempts=4)
        self.assertEqual(4, cc.attempts)


if __name__ == "__main__":
    unittest.main()
