import logging
import os

def setup_logging():
    # An empty TIMETABLE_LOG_DIR logs to the console only
    log_directory = os.environ.get('TIMETABLE_LOG_DIR', 'logs')
    handlers = [logging.StreamHandler()]
    if log_directory:
        os.makedirs(log_directory, exist_ok=True)
        handlers.append(logging.FileHandler(os.path.join(log_directory, 'timetable_planner.log')))

    logging.basicConfig(
        level=logging.DEBUG,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers
    )

    # Create loggers for different modules
    loggers = {
        'generation_factors': logging.getLogger('generation_factors'),
        'combination_generator': logging.getLogger('combination_generator'),
        'combination_scoring': logging.getLogger('combination_scoring'),
        'combination_formatter': logging.getLogger('combination_formatter'),
        'result_validator': logging.getLogger('result_validator'),
        'main': logging.getLogger('main'),
        'views': logging.getLogger('views'),
    }

    level = getattr(logging, os.environ.get('TIMETABLE_LOG_LEVEL', 'DEBUG').upper(), logging.DEBUG)
    for logger in loggers.values():
        logger.setLevel(level)

    return loggers

loggers = setup_logging()
