"""
Coverage fragments recorded during E2E runs and the reports built from them.

Fragments live under ``coverage/v8`` (byte ranges) and ``coverage/istanbul``
(statement maps), one file per test and worker.
"""
