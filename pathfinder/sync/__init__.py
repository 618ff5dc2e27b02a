"""Generic synchronization engine.

Modules:
    result: RemoteResult / UiState variants
    state: ObservableState
    engine: SyncController and friends
"""
