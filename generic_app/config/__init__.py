"""Central export point for all configuration."""
from generic_app.config.domain import (
    AppInfo,
    DomainConfig,
    EntityConfig,
    FieldDefinition,
    FieldKind,
    FieldValidation,
    MappedType,
    RawType,
    SYSTEM_FIELDS,
    domain_config,
    load_domain_config,
    resolve_domain_config,
)
from generic_app.config.features import (
    AuthFeatures,
    CrudFeatures,
    FeaturesConfig,
    StorageFeatures,
    features_config,
)
from generic_app.config.storage import StorageConfig, detect_provider, get_storage_config
