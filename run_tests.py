#!/usr/bin/env python3
# ================================================================================
# Test Runner Script
# ================================================================================
#
# Main entry point for executing the acceptance suites.
#
# Features:
#   - Run harness unit tests (no browser needed)
#   - Run live UI scenarios against a running application
#   - Browser / headless / base URL / environment given on the command line
#     passed to the harness through UI_* environment variables
#   - Application reachability preflight
#   - Generate Allure reports
#
# Usage:
#   python run_tests.py --suite unit
#   python run_tests.py --suite ui --browser firefox --base-url http://localhost:3000
#   python run_tests.py --suite all --tags P0 smoke --parallel 4
#
# ================================================================================

import argparse
import os
import shutil
import subprocess
import sys
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional

import httpx
from loguru import logger

from harness_tools.common import get_config, init_logger


SUITE_PATHS = {
    "unit": ["acceptance/unit"],
    "ui": ["acceptance/ui_testing/tests"],
    "all": ["acceptance"],
}


class TestRunner:
    """
    Orchestrates one test run.

    This class handles:
    - Suite selection and marker filtering
    - Harness settings exported to the pytest process
    - Parallel execution configuration
    - Report generation
    """

    def __init__(
        self,
        suite: str = "all",
        tags: Optional[List[str]] = None,
        parallel: int = 1,
        browser: Optional[str] = None,
        headless: Optional[bool] = None,
        base_url: Optional[str] = None,
        environment: Optional[str] = None,
        allure_report: bool = True,
        verbose: bool = False,
    ):
        """
        Initialize test runner.

        Args:
            suite: Test suite to run - "unit", "ui", "all"
            tags: List of pytest markers to filter tests
            parallel: Number of parallel workers (requires pytest-xdist)
            browser: Browser for UI tests (overrides ui.browser when given)
            headless: Headless mode (overrides ui.headless when given)
            base_url: Application origin (overrides ui.base_url)
            environment: Config overlay name (config/{environment}.yaml)
            allure_report: Generate Allure report
            verbose: Enable verbose output
        """
        self.suite = suite
        self.tags = tags or []
        self.parallel = parallel
        self.browser = browser
        self.headless = headless
        self.base_url = base_url
        self.environment = environment
        self.allure_report = allure_report
        self.verbose = verbose

        # Paths
        self.root_dir = Path(__file__).parent
        self.reports_dir = self.root_dir / "reports"
        self.allure_results = self.reports_dir / "allure-results"
        self.allure_report_dir = self.reports_dir / "allure-report"

    @property
    def runs_ui(self) -> bool:
        return self.suite in ("ui", "all")

    def run(self) -> int:
        """
        Execute the test run.

        Returns:
            Exit code (0 for success, non-zero for failure)
        """
        logger.info("=" * 60)
        logger.info("Starting Test Execution")
        logger.info("=" * 60)
        logger.info(f"Suite: {self.suite}")
        logger.info(f"Tags: {self.tags or 'All'}")
        logger.info(f"Parallel Workers: {self.parallel}")
        if self.runs_ui:
            logger.info(f"Browser: {self._effective_browser()}")
            logger.info(f"Headless: {self._effective_headless()}")
            logger.info(f"Base URL: {self._effective_base_url()}")
        logger.info("=" * 60)

        self._prepare_environment()

        if self.runs_ui and not self._check_application_reachable():
            logger.warning("Application not reachable; UI scenarios will be skipped")

        cmd = self._build_pytest_command()
        logger.info(f"Executing: {' '.join(cmd)}")

        try:
            result = subprocess.run(cmd, cwd=str(self.root_dir), env=self._build_env())
            exit_code = result.returncode
        except OSError as e:
            logger.error(f"Test execution failed: {e}")
            exit_code = 1

        if self.allure_report:
            self._generate_allure_report()

        self._print_summary(exit_code)
        return exit_code

    def _prepare_environment(self) -> None:
        """Create report directories."""
        self.reports_dir.mkdir(parents=True, exist_ok=True)
        self.allure_results.mkdir(parents=True, exist_ok=True)
        logger.debug("Environment prepared")

    def _effective_base_url(self) -> str:
        return self.base_url or get_config("ui.base_url", "http://localhost:3000")

    def _effective_browser(self) -> str:
        return self.browser or get_config("ui.browser", "chromium")

    def _effective_headless(self) -> bool:
        if self.headless is not None:
            return self.headless
        return get_config("ui.headless", True)

    def _check_application_reachable(self) -> bool:
        """Probe the application base URL once before launching browsers."""
        url = self._effective_base_url()
        try:
            response = httpx.get(url, timeout=5.0, follow_redirects=True)
        except httpx.HTTPError as e:
            logger.warning(f"Reachability check failed for {url}: {e}")
            return False
        logger.info(f"Application reachable: {url} (HTTP {response.status_code})")
        return True

    def _build_env(self) -> Dict[str, str]:
        """
        Environment for the pytest process.

        Only settings given on the command line are exported; UI_* keys
        override config.yaml, so anything left unset keeps its configured value.
        """
        env = os.environ.copy()
        if self.browser:
            env["UI_BROWSER"] = self.browser
        if self.headless is not None:
            env["UI_HEADLESS"] = "true" if self.headless else "false"
        if self.base_url:
            env["UI_BASE_URL"] = self.base_url
        if self.environment:
            env["ENVIRONMENT"] = self.environment
        return env

    def _build_pytest_command(self) -> List[str]:
        """Build the pytest command with all options."""
        cmd = [sys.executable, "-m", "pytest"]
        cmd.extend(SUITE_PATHS[self.suite])

        if self.tags:
            cmd.extend(["-m", " or ".join(self.tags)])

        if self.parallel > 1:
            cmd.extend(["-n", str(self.parallel)])

        if self.allure_report:
            cmd.extend(["--alluredir", str(self.allure_results)])

        cmd.append("-v" if self.verbose else "-q")
        return cmd

    def _generate_allure_report(self) -> None:
        """Generate Allure HTML report."""
        logger.info("Generating Allure report...")

        try:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            report_path = self.reports_dir / f"allure-report-{timestamp}"

            subprocess.run([
                "allure", "generate",
                str(self.allure_results),
                "-o", str(report_path),
                "--clean"
            ], check=True)

            # Point the "latest" link at the new report
            latest_link = self.allure_report_dir
            if latest_link.is_symlink():
                latest_link.unlink()
            elif latest_link.exists():
                shutil.rmtree(latest_link)
            latest_link.symlink_to(report_path.name)

            logger.info(f"Report generated: {report_path}")
            logger.info(f"Latest report: {self.allure_report_dir}")

        except FileNotFoundError:
            logger.warning("Allure CLI not found. Please install Allure to generate reports.")
        except (subprocess.CalledProcessError, OSError) as e:
            logger.error(f"Failed to generate Allure report: {e}")

    def _print_summary(self, exit_code: int) -> None:
        """Print test execution summary."""
        logger.info("=" * 60)
        if exit_code == 0:
            logger.info("✅ TEST EXECUTION COMPLETED SUCCESSFULLY")
        else:
            logger.error(f"❌ TEST EXECUTION FAILED (exit code: {exit_code})")

        if self.allure_report:
            logger.info(f"📊 Report available at: {self.allure_report_dir}")

        logger.info("=" * 60)


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="UI Acceptance Harness Test Runner",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run harness unit tests only
  python run_tests.py --suite unit --no-allure

  # Run P0 smoke scenarios in parallel
  python run_tests.py --suite ui --tags P0 smoke --parallel 4

  # Run UI scenarios with a visible Firefox against staging
  python run_tests.py --suite ui --no-headless --browser firefox --env staging

  # Force headless even when config sets ui.headless: false
  python run_tests.py --suite ui --headless
        """
    )

    parser.add_argument(
        "--suite",
        choices=sorted(SUITE_PATHS),
        default="all",
        help="Test suite to run (default: all)"
    )

    parser.add_argument(
        "--tags",
        nargs="+",
        default=[],
        help="Pytest markers to filter tests (e.g., P0 smoke regression)"
    )

    parser.add_argument(
        "--parallel", "-n",
        type=int,
        default=1,
        help="Number of parallel workers (default: 1)"
    )

    parser.add_argument(
        "--browser",
        choices=["chromium", "firefox", "webkit"],
        default=None,
        help="Browser for UI tests (default: ui.browser from config)"
    )

    parser.add_argument(
        "--headless",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Run browser headless; --no-headless shows it (default: ui.headless from config)"
    )

    parser.add_argument(
        "--base-url",
        default=None,
        help="Application origin (default: ui.base_url from config)"
    )

    parser.add_argument(
        "--env",
        default=None,
        help="Configuration overlay to merge (config/<env>.yaml)"
    )

    parser.add_argument(
        "--no-allure",
        action="store_true",
        help="Disable Allure report generation"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose output"
    )

    args = parser.parse_args()

    # The overlay must be selected before the first configuration read
    if args.env:
        os.environ["ENVIRONMENT"] = args.env
    init_logger()

    runner = TestRunner(
        suite=args.suite,
        tags=args.tags,
        parallel=args.parallel,
        browser=args.browser,
        headless=args.headless,
        base_url=args.base_url,
        environment=args.env,
        allure_report=not args.no_allure,
        verbose=args.verbose,
    )

    sys.exit(runner.run())


if __name__ == "__main__":
    main()
