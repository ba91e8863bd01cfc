#!/usr/bin/env python
import os
import sys

if __name__ == "__main__":

    os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'settings.base')

    # Route evaluator warnings through logging during test runs.
    if 'test' in sys.argv[0:3]:
        import logging
        logging.captureWarnings(True)
        sys.argv.append('--noinput')

    from django.core.management import execute_from_command_line
    execute_from_command_line(sys.argv)
