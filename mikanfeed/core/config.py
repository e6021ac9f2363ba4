"""
Configuration module.

Contains Pydantic-based configuration classes for the MikanFeed application.
"""

import json
import logging
import os
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings

from mikanfeed.core.exceptions import ConfigError, ConfigValidationError

logger = logging.getLogger(__name__)

# 命令行可修改的配置项: 命令行键名 -> MikanConfig 字段
CLI_CONFIG_KEYS: Dict[str, str] = {
    'base': 'base',
    'image-proxy': 'image_proxy',
    'include': 'include',
    'exclude': 'exclude',
}
LIST_CONFIG_KEYS = ('include', 'exclude')


class MikanConfig(BaseModel):
    """Mikan 站点配置"""

    model_config = ConfigDict(validate_assignment=True)

    base: str = 'https://mikanime.tv'
    image_base: str = 'https://mikanani.me'
    image_proxy: Optional[str] = None
    include: List[str] = Field(default_factory=list)
    exclude: List[str] = Field(default_factory=list)
    # 同一集保留全部下载链接（默认只保留第一个）
    collect_all_links: bool = False

    @field_validator('base', 'image_base')
    @classmethod
    def check_url(cls, v: str) -> str:
        """站点地址不能为空，去掉末尾的斜杠"""
        v = (v or '').strip()
        if not v:
            raise ValueError('URL must not be empty')
        return v.rstrip('/')

    @field_validator('image_proxy')
    @classmethod
    def empty_proxy_as_none(cls, v: Optional[str]) -> Optional[str]:
        """空字符串视为未配置代理"""
        if v is None or not v.strip():
            return None
        return v.strip()

    @field_validator('include', 'exclude', mode='before')
    @classmethod
    def split_keywords(cls, v):
        """兼容换行分隔的字符串格式"""
        if isinstance(v, str):
            return [kw.strip() for kw in v.split('\n') if kw.strip()]
        return v


class BangumiConfig(BaseModel):
    """Bangumi API 配置"""

    api_base: str = 'https://api.bgm.tv'
    page_size: int = Field(default=100, ge=1, le=100)


class HttpConfig(BaseModel):
    """HTTP 请求配置"""

    proxy: Optional[str] = None
    timeout: int = Field(default=30, ge=1, le=300)
    user_agent: str = 'mikanfeed/0.1'

    def get_proxy(self) -> Optional[str]:
        """返回配置的代理，未配置时回退到环境变量"""
        return self.proxy or os.getenv('HTTP_PROXY') or os.getenv('HTTPS_PROXY')


class PollConfig(BaseModel):
    """RSS 轮询配置"""

    check_interval: int = Field(default=1800, ge=60)
    max_workers: int = Field(default=4, ge=1, le=32)
    # clean-cache 命令留下的请求文件，由运行中的轮询进程消费
    cache_clear_file: str = 'clean-cache.request'


class SubscriptionConfig(BaseModel):
    """单个番剧订阅"""

    id: str
    name: str
    season: Optional[str] = None
    include: List[str] = Field(default_factory=list)
    exclude: List[str] = Field(default_factory=list)


class AppConfig(BaseSettings):
    """主应用配置"""

    mikan: MikanConfig = Field(default_factory=MikanConfig)
    bangumi: BangumiConfig = Field(default_factory=BangumiConfig)
    http: HttpConfig = Field(default_factory=HttpConfig)
    poll: PollConfig = Field(default_factory=PollConfig)
    subscriptions: List[SubscriptionConfig] = Field(default_factory=list)

    model_config = ConfigDict(
        env_prefix='MIKANFEED_',
        env_nested_delimiter='__'
    )

    def get_value(self, key: str) -> Any:
        """获取 mikan 配置项（使用命令行键名）"""
        field_name = self._resolve_cli_key(key)
        return getattr(self.mikan, field_name)

    def set_value(self, key: str, args: List[str]) -> Any:
        """
        设置 mikan 配置项。

        列表类型的配置项使用全部参数，其余只取第一个参数。

        Raises:
            ConfigValidationError: If the key is unknown or the value is invalid.
        """
        field_name = self._resolve_cli_key(key)
        if not args:
            raise ConfigValidationError('Invalid args count', field_name=key)

        value = list(args) if field_name in LIST_CONFIG_KEYS else args[0]
        try:
            setattr(self.mikan, field_name, value)
        except ValidationError as e:
            raise ConfigValidationError(
                f'Invalid value for {key}: {e.errors()[0]["msg"]}',
                field_name=key,
                field_value=value
            )
        return getattr(self.mikan, field_name)

    def unset_value(self, key: str) -> Any:
        """恢复 mikan 配置项的默认值"""
        field_name = self._resolve_cli_key(key)
        default = MikanConfig().model_dump()[field_name]
        setattr(self.mikan, field_name, default)
        return getattr(self.mikan, field_name)

    def _resolve_cli_key(self, key: str) -> str:
        if key not in CLI_CONFIG_KEYS:
            raise ConfigValidationError(f"No config named '{key}'", field_name=key)
        return CLI_CONFIG_KEYS[key]

    @classmethod
    def load(cls, config_path: str = None) -> 'AppConfig':
        """
        加载配置。

        Raises:
            ConfigValidationError: If the file content fails validation.
            ConfigError: If the file cannot be read.
        """
        if config_path is None:
            config_path = os.getenv('CONFIG_PATH', 'config.json')

        if os.path.exists(config_path):
            try:
                with open(config_path, 'r', encoding='utf-8') as f:
                    config_data = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                raise ConfigError(
                    f'无法读取配置文件: {e}',
                    context={'config_path': config_path}
                )
            try:
                return cls(**config_data)
            except ValidationError as e:
                first = e.errors()[0]
                raise ConfigValidationError(
                    f'配置校验失败: {first["msg"]}',
                    field_name='.'.join(str(p) for p in first['loc']),
                    context={'config_path': config_path}
                )

        # 如果配置文件不存在，创建默认配置并保存
        config_instance = cls()
        config_instance.save(config_path)
        logger.info(f'📝 已创建默认配置文件: {config_path}')
        return config_instance

    def save(self, config_path: str = None):
        """保存配置"""
        if config_path is None:
            config_path = os.getenv('CONFIG_PATH', 'config.json')

        with open(config_path, 'w', encoding='utf-8') as f:
            f.write(self.model_dump_json(indent=2))


# 全局配置实例（首次访问时加载）
_config: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """
    Get the global configuration instance.

    Returns:
        AppConfig instance.
    """
    global _config
    if _config is None:
        _config = AppConfig.load()
    return _config

