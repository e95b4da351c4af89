"""Routing — pattern compilation, rule storage, and parameter binding.

Rules are appended by ``Dispatcher.register()`` and matched in
registration order; every matching rule runs, not just the first.
"""
