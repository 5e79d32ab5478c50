#!/usr/bin/env python3
"""
PR Complexity Analyzer
Scores the complexity of a changeset and suggests reviewers.
"""

import sys

from pr_analyzer.cli import main


if __name__ == "__main__":
    sys.exit(main())
