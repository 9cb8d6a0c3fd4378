"""Role and database data models."""

class Role:
    """A Postgres role on a branch."""

    def __init__(self, branch_id, name, protected=False, created_at=None, updated_at=None):
        self.branch_id = branch_id
        self.name = name
        self.protected = protected
        self.created_at = created_at
        self.updated_at = updated_at

    def to_dict(self):
        """Convert to dictionary."""
        return {
            'branch_id': self.branch_id,
            'name': self.name,
            'protected': self.protected,
            'created_at': self.created_at,
            'updated_at': self.updated_at
        }

    @classmethod
    def from_dict(cls, data):
        """Create Role from dictionary."""
        return cls(
            branch_id=data.get('branch_id'),
            name=data['name'],
            protected=data.get('protected', False),
            created_at=data.get('created_at'),
            updated_at=data.get('updated_at')
        )

    def __repr__(self):
        return f"Role(name={self.name})"


class Database:
    """A Postgres database on a branch."""

    def __init__(self, database_id, branch_id, name, owner_name=None,
                 created_at=None, updated_at=None):
        self.id = database_id
        self.branch_id = branch_id
        self.name = name
        self.owner_name = owner_name
        self.created_at = created_at
        self.updated_at = updated_at

    def to_dict(self):
        """Convert to dictionary."""
        return {
            'id': self.id,
            'branch_id': self.branch_id,
            'name': self.name,
            'owner_name': self.owner_name,
            'created_at': self.created_at,
            'updated_at': self.updated_at
        }

    @classmethod
    def from_dict(cls, data):
        """Create Database from dictionary."""
        return cls(
            database_id=data.get('id'),
            branch_id=data.get('branch_id'),
            name=data['name'],
            owner_name=data.get('owner_name'),
            created_at=data.get('created_at'),
            updated_at=data.get('updated_at')
        )

    def __repr__(self):
        return f"Database(name={self.name}, owner={self.owner_name})"
