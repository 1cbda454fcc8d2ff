# 💬 songbot/bot/ui/static_messages.py
"""
💬 Статичні тексти, які бачить користувач чату.

Шаблони з `{...}` форматуються викликачем через `str.format`.
"""

# ================================
# 🎵 ПОШУК І ВІДТВОРЕННЯ
# ================================
SONG_NOT_FOUND = "暂未找到你想听的歌哦~"
NO_SEARCH_SESSION = "请先使用 #点歌 搜索歌曲"
BAD_ORDINAL = "列表中没有第{ordinal}首歌"
DELIVERY_FAILED = "下载音乐失败: {title}"

# ================================
# ☁️ ХМАРА
# ================================
CLOUD_SUMMARY = "云盘数据\n歌曲数量:{count}\n云盘容量:{capacity}\n已使用容量:{used}\n数据可能有延迟"
CLOUD_REFRESH_OK = "更新成功"
CLOUD_CACHE_CLEARED = "云盘缓存已清除"
CLOUD_UPLOAD_OK = "上传云盘成功"
CLOUD_UPLOAD_FAILED = "上传云盘失败，请稍后再试"
BAD_FILE_NAME = "请规范上传文件的命名：歌手-歌名，例如：梁静茹-勇气"
FILE_WAIT_TIMEOUT = "等待文件下载{seconds}秒超时，上传任务已取消。"

# ================================
# 📨 ВІДПОВІДІ НА ПОВІДОМЛЕННЯ
# ================================
REPLY_TO_SHARE_CARD = "请回复一条网易云音乐分享消息"
REPLY_TO_AUDIO_FILE = "请回复一条音频文件消息"
ADMIN_ONLY = "只有管理员可以使用该命令"

# ================================
# 🚨 ПОМИЛКИ
# ================================
ERROR_HTTP_TIMEOUT = "网络请求超时，请稍后再试"
ERROR_HTTP_CONNECTION = "无法连接到音乐服务，请稍后再试"
ERROR_HTTP_STATUS = "音乐服务返回错误状态: {status_code}"
ERROR_TELEGRAM_RETRY_AFTER = "请求过于频繁，请在{seconds}秒后重试"
ERROR_TELEGRAM_GENERAL = "消息发送失败，请稍后再试"
ERROR_UNEXPECTED = "出错了，请稍后再试"
