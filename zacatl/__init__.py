"""zacatl — 레이어드 마이크로서비스 스캐폴딩.

Layered microservice scaffolding: DI-wired route handlers, domain providers
and repositories over FastAPI/Starlette and async PyMongo/SQLAlchemy.
"""

from zacatl.api import (
    AbstractRouteHandler,
    DeleteRouteHandler,
    GetRouteHandler,
    HookHandler,
    PatchRouteHandler,
    PostRouteHandler,
    PutRouteHandler,
    Reply,
    Request,
    RouteSchema,
    make_with_default_response,
)
from zacatl.container import (
    Inject,
    clear_container,
    get_container,
    is_registered,
    register_and_resolve,
    register_dependencies,
    register_dependency,
    register_singleton,
    register_value,
    resolve_dependencies,
    resolve_dependency,
)
from zacatl.layers import ConfigApplication, ConfigDomain, ConfigInfrastructure, ConfigLayers, EntryPoints
from zacatl.platforms import CLICommand, ConfigCLI, ConfigDesktop, ConfigPlatforms, IPCHandler
from zacatl.platforms.server import (
    ApiServerType,
    ConfigServer,
    DatabaseConfig,
    DatabaseVendor,
    HttpServerConfig,
    PageConfig,
    ServerVendor,
)
from zacatl.repositories import (
    BaseRepository,
    MongoRepository,
    MongoRepositoryConfig,
    ORMType,
    SQLAlchemyRepository,
    SQLAlchemyRepositoryConfig,
)
from zacatl.service import ConfigService, RunConfig, Service, ServiceType
from zacatl.utils.exceptions import (
    BadRequestError,
    BadResourceError,
    CustomError,
    ForbiddenError,
    InternalServerError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)

__version__ = "0.1.0"
