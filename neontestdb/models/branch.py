"""Branch data model."""

class CreatedBy:
    """Who created a branch."""

    def __init__(self, name=None, image=None):
        self.name = name
        self.image = image

    def to_dict(self):
        """Convert to dictionary."""
        return {'name': self.name, 'image': self.image}

    @classmethod
    def from_dict(cls, data):
        """Create CreatedBy from dictionary."""
        data = data or {}
        return cls(name=data.get('name'), image=data.get('image'))

    def __repr__(self):
        return f"CreatedBy(name={self.name})"


class Branch:
    """Represents a Neon branch.

    A point-in-time snapshot: the service owns the branch, nothing here is
    kept in sync after the response that produced it.
    """

    COUNTERS = (
        'cpu_used_sec',
        'compute_time_seconds',
        'active_time_seconds',
        'written_data_bytes',
        'data_transfer_bytes',
    )

    def __init__(self, branch_id, name, project_id=None, parent_id=None,
                 parent_lsn=None, parent_timestamp=None, current_state=None,
                 pending_state=None, state_changed_at=None, creation_source=None,
                 primary=False, default=False, protected=False, counters=None,
                 created_at=None, updated_at=None, created_by=None):
        """Initialize a Branch.

        Args:
            branch_id (str): The opaque branch ID (``br-...``)
            name (str): The human-assigned branch name
            project_id (str, optional): The owning project ID
            parent_id (str, optional): ID of the branch this one was forked from
            parent_lsn (str, optional): Parent LSN at fork time
            parent_timestamp (str, optional): Parent timestamp at fork time
            current_state (str, optional): Lifecycle state, e.g. ``init`` or ``ready``
            pending_state (str, optional): State the branch is transitioning to
            state_changed_at (str, optional): Last state transition timestamp
            creation_source (str, optional): What created the branch (console, api...)
            primary (bool): Whether this is the project's primary branch
            default (bool): Whether this is the project's default branch
            protected (bool): Whether the branch is protected
            counters (dict, optional): Usage counters keyed by ``Branch.COUNTERS``
            created_at (str, optional): Creation timestamp
            updated_at (str, optional): Last update timestamp
            created_by (CreatedBy, optional): Creator metadata
        """
        self.id = branch_id
        self.name = name
        self.project_id = project_id
        self.parent_id = parent_id
        self.parent_lsn = parent_lsn
        self.parent_timestamp = parent_timestamp
        self.current_state = current_state
        self.pending_state = pending_state
        self.state_changed_at = state_changed_at
        self.creation_source = creation_source
        self.primary = primary
        self.default = default
        self.protected = protected
        counters = counters or {}
        for counter in self.COUNTERS:
            setattr(self, counter, counters.get(counter, 0))
        self.created_at = created_at
        self.updated_at = updated_at
        self.created_by = created_by or CreatedBy()

    def to_dict(self):
        """Convert to dictionary."""
        data = {
            'id': self.id,
            'project_id': self.project_id,
            'parent_id': self.parent_id,
            'parent_lsn': self.parent_lsn,
            'parent_timestamp': self.parent_timestamp,
            'name': self.name,
            'current_state': self.current_state,
            'pending_state': self.pending_state,
            'state_changed_at': self.state_changed_at,
            'creation_source': self.creation_source,
            'primary': self.primary,
            'default': self.default,
            'protected': self.protected,
            'created_at': self.created_at,
            'updated_at': self.updated_at,
            'created_by': self.created_by.to_dict()
        }
        for counter in self.COUNTERS:
            data[counter] = getattr(self, counter)
        return data

    @classmethod
    def from_dict(cls, data):
        """Create Branch from dictionary.

        Accepts either the bare branch object or the ``{"branch": {...}}``
        envelope the single-branch endpoint returns.
        """
        if 'branch' in data and isinstance(data['branch'], dict):
            data = data['branch']
        return cls(
            branch_id=data['id'],
            name=data['name'],
            project_id=data.get('project_id'),
            parent_id=data.get('parent_id'),
            parent_lsn=data.get('parent_lsn'),
            parent_timestamp=data.get('parent_timestamp'),
            current_state=data.get('current_state'),
            pending_state=data.get('pending_state'),
            state_changed_at=data.get('state_changed_at'),
            creation_source=data.get('creation_source'),
            primary=data.get('primary', False),
            default=data.get('default', False),
            protected=data.get('protected', False),
            counters={counter: data.get(counter, 0) for counter in cls.COUNTERS},
            created_at=data.get('created_at'),
            updated_at=data.get('updated_at'),
            created_by=CreatedBy.from_dict(data.get('created_by'))
        )

    def __repr__(self):
        return f"Branch(id={self.id}, name={self.name}, state={self.current_state})"


class Branches:
    """A branch listing for a project."""

    def __init__(self, branches, annotations=None):
        """Initialize a Branches listing.

        Args:
            branches (list): List of Branch objects
            annotations (dict, optional): Annotations keyed by branch ID
        """
        self.branches = branches
        self.annotations = annotations or {}

    def find_by_name(self, name):
        """Return the first branch whose display name matches, or None."""
        for branch in self.branches:
            if branch.name == name:
                return branch
        return None

    def to_dict(self):
        """Convert to dictionary."""
        return {
            'branches': [branch.to_dict() for branch in self.branches],
            'annotations': self.annotations
        }

    @classmethod
    def from_dict(cls, data):
        """Create Branches from dictionary."""
        return cls(
            branches=[Branch.from_dict(item) for item in data['branches']],
            annotations=data.get('annotations')
        )

    def __len__(self):
        return len(self.branches)

    def __iter__(self):
        return iter(self.branches)

    def __repr__(self):
        return f"Branches(count={len(self.branches)})"
