"""Telegram bot message templates and constants.

Contains all user-facing message templates in Chinese and the command
descriptions shown in the Telegram command menu. Centralizes message
management for easy localization.
"""

# Bot commands and descriptions
HELP_MESSAGE = (
    "你好！我是图片下载机器人。\n\n"
    "/startcollect - 开始收集图片\n"
    "/stopcollect - 停止并打包下载\n"
    "/filename - 设置文件名称"
)

COMMAND_DESCRIPTIONS = {
    "start": "显示此帮助信息",
    "help": "显示此帮助信息",
    "startcollect": "开始收集图片信息",
    "stopcollect": "停止收集并打包下载所有图片",
    "version": "显示程序版本",
    "filename": "设置zip名称",
}

# Collection flow
COLLECT_STARTED_MESSAGE = "✅收集已开始，请发送图片或包含图片的消息。完成后，发送/stopcollect以结束收集"
NOT_COLLECTING_MESSAGE = "🤔 你还没有开始收集，请先发送 /startcollect。"
NO_MESSAGES_MESSAGE = "ℹ️ 你没有发送任何消息，无需处理。"
PROCESSING_MESSAGE = "⏳ 正在处理，请稍候..."
NO_PHOTOS_MESSAGE = "🤷‍♀️ 在你发送的消息中没有找到任何图片。"
DONE_MESSAGE = "✅ 处理完成！共下载 {count} 张图片，正在发送压缩包..."

# Archive name
FILE_NAME_PROMPT_MESSAGE = "请将文件名发送给我，我会将其设置为压缩包名"
FILE_NAME_SET_MESSAGE = "✅已设置文件名为 {file_name}.zip"
EMPTY_FILE_NAME_MESSAGE = "❌ 文件名不能为空"

# Version
VERSION_MESSAGE = "当前版本：{version}"

# Error messages
PROCESSING_FAILED_MESSAGE = "❌ 处理失败: {error}"
DOWNLOAD_FAILED_DEFAULT = "图片下载失败"
DOWNLOAD_FAILED_MESSAGE = "图片下载失败（{failed}/{total}）"
ARCHIVE_FAILED_MESSAGE = "压缩包创建失败"

# Placeholder for secrets removed from error text
REDACTED = "<redacted>"
