"""Branch creation request and result models."""

from neontestdb.models.branch import Branch
from neontestdb.models.connection import ConnectionURI
from neontestdb.models.database import Database, Role
from neontestdb.models.endpoint import Endpoint
from neontestdb.models.operation import Operation
from neontestdb.utils.errors import MissingConnectionURIError

class CreateBranchRequest:
    """Body of a branch creation request."""

    def __init__(self, name, parent_id, endpoint_types=('read_write',)):
        """Initialize a CreateBranchRequest.

        Args:
            name (str): Name for the new branch
            parent_id (str): ID of the branch to fork from
            endpoint_types (tuple): Compute endpoints to provision with the branch
        """
        self.name = name
        self.parent_id = parent_id
        self.endpoint_types = tuple(endpoint_types)

    def to_dict(self):
        """Convert to the JSON body the API expects."""
        return {
            'endpoints': [{'type': endpoint_type} for endpoint_type in self.endpoint_types],
            'branch': {
                'name': self.name,
                'parent_id': self.parent_id
            }
        }

    def __repr__(self):
        return f"CreateBranchRequest(name={self.name}, parent_id={self.parent_id})"


class BranchCreated:
    """Everything the service returns for a newly created branch."""

    def __init__(self, branch, endpoints=None, operations=None, roles=None,
                 databases=None, connection_uris=None):
        """Initialize BranchCreated.

        Args:
            branch (Branch): The new branch
            endpoints (list, optional): Provisioned Endpoint objects
            operations (list, optional): Operation objects still in flight
            roles (list, optional): Default Role objects
            databases (list, optional): Default Database objects
            connection_uris (list, optional): ConnectionURI objects, in service order
        """
        self.branch = branch
        self.endpoints = endpoints or []
        self.operations = operations or []
        self.roles = roles or []
        self.databases = databases or []
        self.connection_uris = connection_uris or []

    @property
    def connection_uri(self):
        """The first connection URI, the one handed to test bodies."""
        if not self.connection_uris:
            raise MissingConnectionURIError(self.branch.name)
        return self.connection_uris[0]

    def to_dict(self):
        """Convert to dictionary."""
        return {
            'branch': self.branch.to_dict(),
            'endpoints': [endpoint.to_dict() for endpoint in self.endpoints],
            'operations': [operation.to_dict() for operation in self.operations],
            'roles': [role.to_dict() for role in self.roles],
            'databases': [database.to_dict() for database in self.databases],
            'connection_uris': [uri.to_dict() for uri in self.connection_uris]
        }

    @classmethod
    def from_dict(cls, data):
        """Create BranchCreated from dictionary."""
        return cls(
            branch=Branch.from_dict(data['branch']),
            endpoints=[Endpoint.from_dict(item) for item in data.get('endpoints') or []],
            operations=[Operation.from_dict(item) for item in data.get('operations') or []],
            roles=[Role.from_dict(item) for item in data.get('roles') or []],
            databases=[Database.from_dict(item) for item in data.get('databases') or []],
            connection_uris=[ConnectionURI.from_dict(item) for item in data.get('connection_uris') or []]
        )

    def __repr__(self):
        return f"BranchCreated(branch={self.branch.name}, endpoints={len(self.endpoints)})"
