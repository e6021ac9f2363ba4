"""
基础设施层模块。

提供外部服务集成实现，包括：
- HTTP 客户端（requests）
- Mikan 页面解析（BeautifulSoup）
- Bangumi 元数据适配器
- RSS 读取
- 仓储实现（SQLAlchemy）
"""
