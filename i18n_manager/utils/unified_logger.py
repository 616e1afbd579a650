"""
Unified logging system for i18n Manager
Provides consistent console output for comparison runs and batch translations
"""
import sys
import os
from datetime import datetime
from typing import Optional, Dict, Any, Callable
from enum import Enum


class LogLevel(Enum):
    """Log levels with priority values"""
    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40
    CRITICAL = 50


class LogType(Enum):
    """Types of log messages for special handling"""
    GENERAL = "general"
    PROVIDER_REQUEST = "provider_request"
    PROVIDER_RESPONSE = "provider_response"
    PROGRESS = "progress"
    COMPARISON_SUMMARY = "comparison_summary"
    BATCH_START = "batch_start"
    BATCH_END = "batch_end"
    FILE_OPERATION = "file_operation"
    ERROR_DETAIL = "error_detail"


class Colors:
    """ANSI color codes for terminal output"""
    # Check if colors should be disabled
    NO_COLOR = os.environ.get('NO_COLOR') is not None or not sys.stdout.isatty()

    YELLOW = '' if NO_COLOR else '\033[93m'
    WHITE = '' if NO_COLOR else '\033[97m'
    GRAY = '' if NO_COLOR else '\033[90m'
    ORANGE = '' if NO_COLOR else '\033[38;5;214m'
    GREEN = '' if NO_COLOR else '\033[92m'
    RED = '' if NO_COLOR else '\033[91m'
    ENDC = '' if NO_COLOR else '\033[0m'

    @classmethod
    def disable(cls):
        """Disable all colors"""
        cls.YELLOW = cls.WHITE = cls.GRAY = cls.ORANGE = cls.GREEN = cls.RED = cls.ENDC = ''


class UnifiedLogger:
    """
    Unified logger that provides consistent logging across the CLI and library use
    """

    def __init__(self,
                 name: str = "i18nManager",
                 console_output: bool = True,
                 enable_colors: bool = True,
                 min_level: LogLevel = LogLevel.INFO,
                 storage_callback: Optional[Callable] = None):
        """
        Initialize the unified logger

        Args:
            name: Logger name/identifier
            console_output: Whether to output to console
            enable_colors: Whether to use colored output
            min_level: Minimum log level to display
            storage_callback: Callback receiving every structured log entry
        """
        self.name = name
        self.console_output = console_output
        self.enable_colors = enable_colors
        self.min_level = min_level
        self.storage_callback = storage_callback

        # Batch state
        self.batch_state = {
            'source_lang': '',
            'target_langs': [],
            'service': '',
            'total_items': 0,
            'start_time': None,
            'in_progress': False
        }

        if not enable_colors:
            Colors.disable()

    def _format_timestamp(self) -> str:
        """Format current timestamp"""
        return datetime.now().strftime("%H:%M:%S")

    def _format_console_message(self, level: LogLevel, message: str,
                                log_type: LogType = LogType.GENERAL,
                                data: Optional[Dict[str, Any]] = None) -> str:
        """Format message for console output"""
        timestamp = self._format_timestamp()

        level_colors = {
            LogLevel.DEBUG: Colors.GRAY,
            LogLevel.INFO: Colors.WHITE,
            LogLevel.WARNING: Colors.YELLOW,
            LogLevel.ERROR: Colors.RED,
            LogLevel.CRITICAL: Colors.RED
        }

        color = level_colors.get(level, Colors.WHITE)

        if log_type == LogType.PROVIDER_REQUEST:
            return self._format_provider_request(data or {})
        elif log_type == LogType.PROVIDER_RESPONSE:
            return self._format_provider_response(data or {})
        elif log_type == LogType.PROGRESS:
            return self._format_progress(data or {})
        elif log_type == LogType.COMPARISON_SUMMARY:
            return self._format_comparison_summary(message, data or {})
        elif log_type == LogType.BATCH_START:
            return self._format_batch_start(message, data or {})
        elif log_type == LogType.BATCH_END:
            return self._format_batch_end(message, data or {})
        elif log_type == LogType.ERROR_DETAIL:
            return self._format_error_detail(message, data or {})
        else:
            level_str = f"[{level.name}]" if level != LogLevel.INFO else ""
            return f"{color}[{timestamp}] {level_str} {message}{Colors.ENDC}"

    def _format_provider_request(self, data: Dict[str, Any]) -> str:
        """Format an outgoing translation request"""
        timestamp = self._format_timestamp()
        output = [f"{Colors.ORANGE}[{timestamp}] SENDING TO {str(data.get('service', '?')).upper()}{Colors.ENDC}"]
        if 'path' in data:
            output.append(f"{Colors.GRAY}Key: {data['path']}{Colors.ENDC}")
        if 'source_lang' in data and 'target_lang' in data:
            output.append(f"{Colors.GRAY}Languages: {data['source_lang']} → {data['target_lang']}{Colors.ENDC}")
        if self.min_level == LogLevel.DEBUG and 'text' in data:
            output.append(f"{Colors.ORANGE}{data['text']}{Colors.ENDC}")
        return '\n'.join(output)

    def _format_provider_response(self, data: Dict[str, Any]) -> str:
        """Format a translation response"""
        timestamp = self._format_timestamp()
        output = [f"{Colors.GREEN}[{timestamp}] RESPONSE{Colors.ENDC}"]
        if 'execution_time' in data:
            output.append(f"{Colors.GRAY}Execution time: {data['execution_time']:.2f} seconds{Colors.ENDC}")
        if self.min_level == LogLevel.DEBUG and 'response' in data:
            output.append(f"{Colors.GREEN}{data['response']}{Colors.ENDC}")
        return '\n'.join(output)

    def _format_progress(self, data: Dict[str, Any]) -> str:
        """Format progress summary"""
        percentage = data.get('percentage', 0)
        current = data.get('current', 0)
        total = data.get('total', self.batch_state['total_items'])

        bar_length = 30
        filled = int(bar_length * percentage / 100)
        bar = '█' * filled + '░' * (bar_length - filled)
        return f"{Colors.WHITE}[{bar}] {current}/{total} keys ({percentage}%){Colors.ENDC}"

    def _format_comparison_summary(self, message: str, data: Dict[str, Any]) -> str:
        """Format the status counts of a reconciliation report"""
        output = [f"{Colors.YELLOW}{message or 'COMPARISON RESULTS'}{Colors.ENDC}"]
        if 'languages' in data:
            output.append(f"{Colors.GRAY}Languages: {', '.join(data['languages'])}{Colors.ENDC}")
        output.append(f"{Colors.WHITE}Keys compared: {data.get('total', 0)}{Colors.ENDC}")
        for label, count in data.get('counts', {}).items():
            color = Colors.GREEN if label == 'Ok' else Colors.YELLOW
            output.append(f"{color}  {label}: {count}{Colors.ENDC}")
        return '\n'.join(output)

    def _format_batch_start(self, message: str, data: Dict[str, Any]) -> str:
        """Format batch start message"""
        self.batch_state.update({
            'source_lang': data.get('source_lang', 'Unknown'),
            'target_langs': data.get('target_langs', []),
            'service': data.get('service', 'Unknown'),
            'total_items': data.get('total_items', 0),
            'start_time': datetime.now(),
            'in_progress': True
        })

        output = [f"{Colors.YELLOW}BATCH TRANSLATION STARTED{Colors.ENDC}"]
        targets = ', '.join(self.batch_state['target_langs']) or 'Unknown'
        output.append(f"{Colors.WHITE}Languages: {self.batch_state['source_lang']} → {targets}{Colors.ENDC}")
        output.append(f"{Colors.GRAY}Service: {self.batch_state['service']}{Colors.ENDC}")
        output.append(f"{Colors.WHITE}Keys to translate: {self.batch_state['total_items']}{Colors.ENDC}")
        return '\n'.join(output)

    def _format_batch_end(self, message: str, data: Dict[str, Any]) -> str:
        """Format batch end message"""
        output = [f"\n{Colors.WHITE}{message or 'BATCH TRANSLATION COMPLETE'}{Colors.ENDC}"]

        if self.batch_state['start_time']:
            duration = datetime.now() - self.batch_state['start_time']
            output.append(f"{Colors.GRAY}Duration: {duration}{Colors.ENDC}")

        output.append(f"{Colors.WHITE}Translated: {data.get('success_count', 0)}{Colors.ENDC}")
        if data.get('failed_count', 0) > 0:
            output.append(f"{Colors.YELLOW}Failed: {data['failed_count']}{Colors.ENDC}")
        if data.get('cancelled'):
            output.append(f"{Colors.YELLOW}Cancelled before all keys were attempted{Colors.ENDC}")

        self.batch_state['in_progress'] = False
        return '\n'.join(output)

    def _format_error_detail(self, message: str, data: Dict[str, Any]) -> str:
        """Format detailed error message"""
        timestamp = self._format_timestamp()
        output = [f"{Colors.RED}[{timestamp}] ERROR: {message}{Colors.ENDC}"]

        if 'details' in data:
            output.append(f"{Colors.RED}Details: {data['details']}{Colors.ENDC}")
        if 'path' in data:
            output.append(f"{Colors.RED}Key: {data['path']}{Colors.ENDC}")

        return '\n'.join(output)

    def log(self, level: LogLevel, message: str,
            log_type: LogType = LogType.GENERAL,
            data: Optional[Dict[str, Any]] = None):
        """
        Main logging method

        Args:
            level: Log level
            message: Log message
            log_type: Type of log for special formatting
            data: Additional data for the log entry
        """
        if level.value < self.min_level.value:
            return

        if self.console_output:
            try:
                console_msg = self._format_console_message(level, message, log_type, data)
                if console_msg:
                    print(console_msg, flush=True)
            except UnicodeEncodeError:
                # Windows consoles (cp1252) choke on some characters
                safe_message = message.encode('ascii', 'replace').decode('ascii')
                print(f"[{self._format_timestamp()}] {safe_message}", flush=True)

        log_entry = {
            'timestamp': datetime.now().isoformat(),
            'level': level.name,
            'type': log_type.value,
            'message': message,
            'data': data or {}
        }

        if self.storage_callback:
            self.storage_callback(log_entry)

    # Convenience methods
    def debug(self, message: str, log_type: LogType = LogType.GENERAL, data: Optional[Dict[str, Any]] = None):
        self.log(LogLevel.DEBUG, message, log_type, data)

    def info(self, message: str, log_type: LogType = LogType.GENERAL, data: Optional[Dict[str, Any]] = None):
        self.log(LogLevel.INFO, message, log_type, data)

    def warning(self, message: str, log_type: LogType = LogType.GENERAL, data: Optional[Dict[str, Any]] = None):
        self.log(LogLevel.WARNING, message, log_type, data)

    def error(self, message: str, log_type: LogType = LogType.GENERAL, data: Optional[Dict[str, Any]] = None):
        self.log(LogLevel.ERROR, message, log_type, data)


# Global logger instance
_global_logger = None


def get_logger(name: str = "i18nManager", **kwargs) -> UnifiedLogger:
    """
    Get or create the global logger instance

    Args:
        name: Logger name
        **kwargs: Additional arguments for UnifiedLogger

    Returns:
        UnifiedLogger instance
    """
    global _global_logger
    if _global_logger is None:
        _global_logger = UnifiedLogger(name, **kwargs)
    elif 'storage_callback' in kwargs:
        _global_logger.storage_callback = kwargs['storage_callback']
    return _global_logger


def setup_cli_logger(enable_colors: bool = True) -> UnifiedLogger:
    """Setup logger for CLI usage"""
    # Import here to avoid circular dependencies
    from i18n_manager.config import DEBUG_MODE

    return get_logger(
        console_output=True,
        enable_colors=enable_colors,
        min_level=LogLevel.DEBUG if DEBUG_MODE else LogLevel.INFO
    )
