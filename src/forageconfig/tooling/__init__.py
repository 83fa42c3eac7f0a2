"""Engine behind the ``config read`` and ``config write`` commands."""
