"""Compute endpoint data model."""

class Endpoint:
    """Represents a compute endpoint provisioned for a branch."""

    FIELDS = (
        'host',
        'id',
        'project_id',
        'branch_id',
        'autoscaling_limit_min_cu',
        'autoscaling_limit_max_cu',
        'region_id',
        'type',
        'current_state',
        'pending_state',
        'settings',
        'pooler_enabled',
        'pooler_mode',
        'disabled',
        'passwordless_access',
        'creation_source',
        'created_at',
        'updated_at',
        'proxy_host',
        'suspend_timeout_seconds',
        'provisioner',
    )

    def __init__(self, **fields):
        unknown = set(fields) - set(self.FIELDS)
        if unknown:
            raise TypeError(f"Unknown endpoint fields: {sorted(unknown)}")
        for field in self.FIELDS:
            setattr(self, field, fields.get(field))
        if self.settings is None:
            self.settings = {}

    def to_dict(self):
        """Convert to dictionary."""
        return {field: getattr(self, field) for field in self.FIELDS}

    @classmethod
    def from_dict(cls, data):
        """Create Endpoint from dictionary, ignoring fields this client doesn't model."""
        return cls(**{field: data[field] for field in cls.FIELDS if field in data})

    def __repr__(self):
        return f"Endpoint(id={self.id}, type={self.type}, host={self.host})"
