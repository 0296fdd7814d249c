"""ViewModel package for UI state and command surfaces.

Call context:
    ``balancekit.app`` imports concrete viewmodels from this package to bind
    view callbacks to state transitions.

Dependencies:
    Modules in this package depend on domain types and lightweight formatting
    helpers only. I/O adapters and use-case orchestration remain outside.

Responsibilities:
    - Own observable UI state and the event channel that mutates it.
    - Transform ``ViewState`` snapshots into view-facing text.
    - Keep MVVM boundaries explicit by avoiding transport or persistence logic.
"""
