"""
MikanFeed Application Entry Point.

Command line interface for browsing Mikan series, managing the site
configuration and subscriptions, and polling subscribed RSS feeds.
"""

import argparse
import logging
import os
import sys
import time
from datetime import datetime, timedelta
from typing import List

import schedule

from mikanfeed.core.exceptions import ConfigValidationError, MikanFeedError

logger = logging.getLogger(__name__)

# 轮询进程检查清理请求的间隔（秒）
CACHE_CLEAR_CHECK_INTERVAL = 5

WEEKDAY_NAMES = ['周日', '周一', '周二', '周三', '周四', '周五', '周六']


def setup_logging(debug: bool = False) -> None:
    """配置日志：按日期写入 LOG_PATH，同时输出到控制台"""
    log_path = os.getenv('LOG_PATH', 'logs')
    os.makedirs(log_path, exist_ok=True)

    # 生成带日期的日志文件名
    today = datetime.now().strftime('%Y-%m-%d')
    log_file = os.path.join(log_path, f'mikanfeed_{today}.log')

    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.FileHandler(log_file, encoding='utf-8'),
            logging.StreamHandler(sys.stdout)
        ]
    )


def init_database():
    """初始化数据库"""
    from mikanfeed.container import container

    logger.info('💾 正在初始化数据库...')
    container.db_manager().init_db()
    logger.info('✅ 数据库初始化完成')


def handle_calendar_command(args, container):
    """打印每周放送日历"""
    for day in container.series_service().get_calendar():
        print(f'== {WEEKDAY_NAMES[day.weekday]} ==')
        for item in day.items:
            print(f'  [{item.id}] {item.name}')


def handle_search_command(args, container):
    """搜索番剧"""
    result = container.series_service().search_series(args.keyword)
    if not result.items:
        print('没有找到匹配的番剧')
        return
    for item in result.items:
        print(f'[{item.id}] {item.name}')


def handle_series_command(args, container):
    """打印番剧详情"""
    service = container.series_service()
    series = service.get_series(args.id)
    source = service.build_source(series)
    print(f'[{series.id}] {series.name}')
    if series.pub_at:
        print(f'放送日期: {series.pub_at.date().isoformat()}')
    if series.count:
        print(f'总集数: {series.count}')
    if series.tags:
        print(f'标签: {", ".join(series.tags)}')
    if series.poster_url:
        print(f'海报: {series.poster_url}')
    print(f'RSS: {source.url}')
    print(f'页面: {source.site}')
    if series.description:
        print()
        print(series.description)


def handle_episodes_command(args, container):
    """打印剧集列表及下载链接"""
    result = container.series_service().get_episodes(args.id, args.page, args.size)
    for episode in result.items:
        print(f'#{episode.no} {episode.title}')
        for link in episode.download_links:
            print(f'    {link.url}')
    print(f'-- 第 {result.page + 1} 页，共 {result.total} 集 --')


def handle_config_command(args, container):
    """查看或修改配置"""
    from mikanfeed.core.config import CLI_CONFIG_KEYS

    config = container.app_config()

    if args.action == 'list':
        for key in CLI_CONFIG_KEYS:
            print(f'{key} = {_format_value(config.get_value(key))}')
        return

    if not args.key:
        raise ConfigValidationError(f'config {args.action} requires a key')

    if args.action == 'get':
        print(_format_value(config.get_value(args.key)))
        return

    if args.action == 'set':
        value = config.set_value(args.key, args.values)
    else:
        value = config.unset_value(args.key)
    config.save()
    logger.info(f'✅ 配置已更新: {args.key} = {_format_value(value)}')


def handle_subscribe_command(args, container):
    """订阅番剧"""
    config = container.app_config()
    series = container.series_service().get_series(args.id)
    if args.season:
        series.season = args.season

    subscription = container.series_service().build_subscription(series)
    registry = container.subscription_registry()
    registry.load_from_config(config)
    registry.register(subscription)
    registry.dump_to_config(config)
    config.save()
    print(f'已订阅: [{subscription.id}] {subscription.identity.display_name}')
    print(f'RSS: {subscription.feed_url}')


def handle_clean_cache_command(args, container):
    """请求运行中的轮询进程清空下载缓存"""
    clear_request = container.cache_clear_request()
    clear_request.request()
    print(f'已提交缓存清理请求，轮询进程将在 {CACHE_CLEAR_CHECK_INTERVAL} 秒内清空缓存')
    print(f'请求文件: {clear_request.path}')


def handle_poll_command(args, container):
    """轮询订阅的 RSS"""
    config = container.app_config()
    init_database()

    registry = container.subscription_registry()
    registry.load_from_config(config)
    poller = container.feed_poller()
    cache = container.dedup_cache()
    clear_request = container.cache_clear_request()
    # 启动前遗留的请求没有意义
    clear_request.apply(cache)

    def poll_task():
        for result in poller.poll_all():
            for entry in result.accepted:
                print(f'[{result.series_id}] {entry.title}')
                if entry.torrent_url:
                    print(f'    {entry.torrent_url}')

    # 立即执行一次
    logger.info('⚡ 立即执行首次RSS检查...')
    poll_task()
    if args.once:
        return

    interval = config.poll.check_interval

    def scheduled_task():
        poll_task()
        next_run = datetime.now() + timedelta(seconds=interval)
        logger.info(f"⏰ 下次RSS检查时间: {next_run.strftime('%Y-%m-%d %H:%M:%S')}")

    logger.info(f'🔔 启动定时任务调度器，检查间隔: {interval} 秒')
    schedule.every(interval).seconds.do(scheduled_task)
    schedule.every(CACHE_CLEAR_CHECK_INTERVAL).seconds.do(clear_request.apply, cache)

    try:
        while True:
            schedule.run_pending()
            time.sleep(1)
    except KeyboardInterrupt:
        logger.info('🛑 接收到停止信号，正在退出...')
        schedule.clear()


def _format_value(value) -> str:
    if isinstance(value, list):
        return ', '.join(value) if value else '(empty)'
    return '(unset)' if value is None else str(value)


def build_parser() -> argparse.ArgumentParser:
    """构建命令行解析器"""
    parser = argparse.ArgumentParser(description='MikanFeed - Mikan 番剧订阅工具')
    parser.add_argument('--debug', action='store_true', help='启用debug模式')
    subparsers = parser.add_subparsers(dest='command', help='可用命令')

    subparsers.add_parser('calendar', help='查看每周放送日历')

    search_parser = subparsers.add_parser('search', help='搜索番剧')
    search_parser.add_argument('keyword', help='关键词')

    series_parser = subparsers.add_parser('series', help='查看番剧详情')
    series_parser.add_argument('id', help='Mikan 番剧 ID')

    episodes_parser = subparsers.add_parser('episodes', help='查看剧集列表')
    episodes_parser.add_argument('id', help='Mikan 番剧 ID')
    episodes_parser.add_argument('--page', type=int, default=0, help='页码（从0开始）')
    episodes_parser.add_argument('--size', type=int, default=None, help='每页数量')

    config_parser = subparsers.add_parser('config', help='查看或修改配置')
    config_parser.add_argument('action', choices=['list', 'get', 'set', 'unset'])
    config_parser.add_argument('key', nargs='?', help='配置项名称')
    config_parser.add_argument('values', nargs='*', help='配置值')

    subscribe_parser = subparsers.add_parser('subscribe', help='订阅番剧')
    subscribe_parser.add_argument('id', help='Mikan 番剧 ID')
    subscribe_parser.add_argument('--season', default=None, help='季度名称')

    subparsers.add_parser('clean-cache', help='清空下载缓存')

    poll_parser = subparsers.add_parser('poll', help='轮询订阅的RSS')
    poll_parser.add_argument('--once', action='store_true', help='只执行一次')

    return parser


COMMAND_HANDLERS = {
    'calendar': handle_calendar_command,
    'search': handle_search_command,
    'series': handle_series_command,
    'episodes': handle_episodes_command,
    'config': handle_config_command,
    'subscribe': handle_subscribe_command,
    'clean-cache': handle_clean_cache_command,
    'poll': handle_poll_command,
}


def main(argv: List[str] = None) -> int:
    """主程序入口"""
    from mikanfeed.container import container

    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.debug)
    if args.debug:
        logger.info('🐛 DEBUG模式已启用')

    handler = COMMAND_HANDLERS.get(args.command)
    if handler is None:
        parser.print_help()
        return 1

    logger.debug(f'📁 配置文件路径: {os.getenv("CONFIG_PATH", "config.json")}')
    try:
        handler(args, container)
    except MikanFeedError as e:
        logger.error(f'❌ {e}')
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
