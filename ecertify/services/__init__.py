"""Services Layer: the Ledger facade, the imperative shell around core/.

Invariants:
    - Only the facade is exposed to routes; core components are never reached directly
    - The facade owns locking, time and event emission
"""
