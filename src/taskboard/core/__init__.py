"""
State container core.

Components:
- events.py: event classes + constructor helpers
- state.py: AppState snapshot
- reducer.py: transition function
- effects.py: effect runner and the fetch workflow
- store.py: Store (dispatch / get_state / subscribe)
- ports.py: Protocols the core depends on
- errors.py: package exceptions
"""
