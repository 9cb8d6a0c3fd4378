"""Operation data model."""

class Operation:
    """Represents an asynchronous operation the service runs for a branch.

    Creation returns while operations such as endpoint startup are still
    running. They are reported, never polled; the first connection attempt
    is what tells a caller whether the compute came up.
    """

    def __init__(self, operation_id, project_id, branch_id, action, status,
                 endpoint_id=None, failures_count=0, created_at=None,
                 updated_at=None, total_duration_ms=0):
        """Initialize an Operation.

        Args:
            operation_id (str): The operation ID
            project_id (str): The project ID
            branch_id (str): The branch the operation acts on
            action (str): What the operation does, e.g. ``create_branch``
            status (str): Operation status, e.g. ``running`` or ``finished``
            endpoint_id (str, optional): Endpoint the operation acts on
            failures_count (int): Number of failed attempts so far
            created_at (str, optional): Creation timestamp
            updated_at (str, optional): Last update timestamp
            total_duration_ms (int): Time spent so far
        """
        self.id = operation_id
        self.project_id = project_id
        self.branch_id = branch_id
        self.endpoint_id = endpoint_id
        self.action = action
        self.status = status
        self.failures_count = failures_count
        self.created_at = created_at
        self.updated_at = updated_at
        self.total_duration_ms = total_duration_ms

    def to_dict(self):
        """Convert to dictionary."""
        data = {
            'id': self.id,
            'project_id': self.project_id,
            'branch_id': self.branch_id,
            'action': self.action,
            'status': self.status,
            'failures_count': self.failures_count,
            'created_at': self.created_at,
            'updated_at': self.updated_at,
            'total_duration_ms': self.total_duration_ms
        }
        if self.endpoint_id:
            data['endpoint_id'] = self.endpoint_id
        return data

    @classmethod
    def from_dict(cls, data):
        """Create Operation from dictionary."""
        return cls(
            operation_id=data['id'],
            project_id=data.get('project_id'),
            branch_id=data.get('branch_id'),
            action=data.get('action'),
            status=data.get('status'),
            endpoint_id=data.get('endpoint_id'),
            failures_count=data.get('failures_count', 0),
            created_at=data.get('created_at'),
            updated_at=data.get('updated_at'),
            total_duration_ms=data.get('total_duration_ms', 0)
        )

    def __repr__(self):
        return f"Operation(id={self.id}, action={self.action}, status={self.status})"
