#!/usr/bin/env python3
"""
Entry point for running as module: python -m jenkins_trigger
"""

from jenkins_trigger.app import app


if __name__ == "__main__":
    app(prog_name="jenkins-trigger")
