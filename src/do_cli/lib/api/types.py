"""
Domain entities returned by the DigitalOcean API client
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple


@dataclass(frozen=True)
class Team:
    """Team the account belongs to"""
    uuid: Optional[str] = None
    name: Optional[str] = None


@dataclass(frozen=True)
class Account:
    """Account information"""
    droplet_limit: int = 0
    floating_ip_limit: int = 0
    volume_limit: int = 0
    email: Optional[str] = None
    uuid: Optional[str] = None
    email_verified: bool = False
    status: Optional[str] = None
    status_message: Optional[str] = None
    team: Optional[Team] = None


@dataclass(frozen=True)
class Region:
    """Datacenter region"""
    name: Optional[str] = None
    slug: Optional[str] = None
    features: Tuple[str, ...] = ()
    available: bool = False
    sizes: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Size:
    """Droplet size plan"""
    slug: Optional[str] = None
    memory: int = 0
    vcpus: int = 0
    disk: int = 0
    transfer: float = 0.0
    price_monthly: float = 0.0
    price_hourly: float = 0.0
    regions: Tuple[str, ...] = ()
    available: bool = False


@dataclass(frozen=True)
class Kernel:
    """Kernel the droplet boots"""
    id: int = 0
    name: Optional[str] = None
    version: Optional[str] = None


@dataclass(frozen=True)
class Image:
    """Image the droplet was created from"""
    id: int = 0
    name: Optional[str] = None
    type: Optional[str] = None
    distribution: Optional[str] = None
    slug: Optional[str] = None
    public: bool = False
    regions: Tuple[str, ...] = ()
    min_disk_size: int = 0
    size_gigabytes: float = 0.0
    created_at: Optional[datetime] = None
    description: Optional[str] = None
    tags: Tuple[str, ...] = ()
    status: Optional[str] = None
    error_message: Optional[str] = None


@dataclass(frozen=True)
class NetworkV4:
    """IPv4 interface"""
    ip_address: Optional[str] = None
    netmask: Optional[str] = None
    gateway: Optional[str] = None
    type: Optional[str] = None


@dataclass(frozen=True)
class NetworkV6:
    """IPv6 interface, netmask is the prefix length"""
    ip_address: Optional[str] = None
    netmask: int = 0
    gateway: Optional[str] = None
    type: Optional[str] = None


@dataclass(frozen=True)
class Networks:
    """Network interfaces attached to a droplet"""
    v4: Tuple[NetworkV4, ...] = ()
    v6: Tuple[NetworkV6, ...] = ()

    def ipv4_address(self, network_type: str) -> Optional[str]:
        """First IPv4 address of the given type"""
        for network in self.v4:
            if network.type == network_type:
                return network.ip_address
        return None

    def ipv6_address(self, network_type: str) -> Optional[str]:
        """First IPv6 address of the given type"""
        for network in self.v6:
            if network.type == network_type:
                return network.ip_address
        return None


@dataclass(frozen=True)
class Droplet:
    """
    Virtual machine instance

    An id of 0 never identifies a real droplet.
    """
    id: int = 0
    name: Optional[str] = None
    memory: int = 0
    vcpus: int = 0
    disk: int = 0
    locked: bool = False
    status: Optional[str] = None
    created_at: Optional[datetime] = None
    size_slug: Optional[str] = None
    vpc_uuid: Optional[str] = None
    kernel: Optional[Kernel] = None
    image: Optional[Image] = None
    size: Optional[Size] = None
    region: Optional[Region] = None
    networks: Optional[Networks] = None
    features: Tuple[str, ...] = ()
    tags: Tuple[str, ...] = ()
    volume_ids: Tuple[str, ...] = ()
    backup_ids: Tuple[int, ...] = ()
    snapshot_ids: Tuple[int, ...] = ()

    @property
    def public_ipv4(self) -> Optional[str]:
        return self.networks.ipv4_address("public") if self.networks else None

    @property
    def private_ipv4(self) -> Optional[str]:
        return self.networks.ipv4_address("private") if self.networks else None

    @property
    def public_ipv6(self) -> Optional[str]:
        return self.networks.ipv6_address("public") if self.networks else None


@dataclass(frozen=True)
class CreateDropletRequest:
    """Parameters for creating a droplet"""
    name: str
    region: str
    size: str
    image: str
    ssh_keys: Tuple[str, ...] = ()
    tags: Tuple[str, ...] = ()
    volumes: Tuple[str, ...] = ()
    user_data: Optional[str] = None
    vpc_uuid: Optional[str] = None
    backups: bool = False
    ipv6: bool = False
    monitoring: bool = False
    private_networking: bool = False

    def missing_fields(self) -> Tuple[str, ...]:
        """Names of required fields that are empty"""
        required = {
            "name": self.name,
            "region": self.region,
            "size": self.size,
            "image": self.image,
        }
        return tuple(key for key, value in required.items() if not value or not str(value).strip())
