"""Connection URI data models."""

class ConnectionParameters:
    """The decomposed parts of a connection string."""

    def __init__(self, database, role, password, host, pooler_host=None):
        """Initialize ConnectionParameters.

        Args:
            database (str): Database name
            role (str): Role (user) name
            password (str): Role password
            host (str): Endpoint host
            pooler_host (str, optional): Host of the pooled endpoint
        """
        self.database = database
        self.role = role
        self.password = password
        self.host = host
        self.pooler_host = pooler_host

    def to_dict(self):
        """Convert to dictionary."""
        return {
            'database': self.database,
            'password': self.password,
            'role': self.role,
            'host': self.host,
            'pooler_host': self.pooler_host
        }

    @classmethod
    def from_dict(cls, data):
        """Create ConnectionParameters from dictionary."""
        return cls(
            database=data['database'],
            role=data['role'],
            password=data.get('password'),
            host=data['host'],
            pooler_host=data.get('pooler_host')
        )

    def __repr__(self):
        # Never print the password
        return f"ConnectionParameters(host={self.host}, database={self.database}, role={self.role})"


class ConnectionURI:
    """A credential-bearing connection string plus its parts."""

    def __init__(self, connection_uri, connection_parameters):
        """Initialize a ConnectionURI.

        Args:
            connection_uri (str): Full ``postgresql://`` connection string
            connection_parameters (ConnectionParameters): Its decomposed parts
        """
        self.connection_uri = connection_uri
        self.connection_parameters = connection_parameters

    @property
    def host(self):
        return self.connection_parameters.host

    @property
    def database(self):
        return self.connection_parameters.database

    @property
    def role(self):
        return self.connection_parameters.role

    @property
    def password(self):
        return self.connection_parameters.password

    def to_dict(self):
        """Convert to dictionary."""
        return {
            'connection_uri': self.connection_uri,
            'connection_parameters': self.connection_parameters.to_dict()
        }

    @classmethod
    def from_dict(cls, data):
        """Create ConnectionURI from dictionary."""
        return cls(
            connection_uri=data['connection_uri'],
            connection_parameters=ConnectionParameters.from_dict(data['connection_parameters'])
        )

    def __str__(self):
        return self.connection_uri

    def __repr__(self):
        return f"ConnectionURI(host={self.host}, database={self.database}, role={self.role})"
