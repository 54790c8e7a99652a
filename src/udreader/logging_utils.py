import logging
from logging.handlers import RotatingFileHandler
from dotenv import load_dotenv
import os

CONSOLE_FORMAT = "%(levelname)s: %(message)s"


def setup_logging(logger):
	load_dotenv()

	log_level = os.getenv("LOG_LEVEL", "INFO").upper()
	logger.setLevel(getattr(logging, log_level, logging.INFO))

	# Handlers are only added once, the command line tool may run many times in one process.
	if logger.handlers:
		return

	# An empty file name turns the file off.
	log_file = os.getenv("LOG_FILE", "udreader.log")
	error_file = os.getenv("ERROR_FILE", "")

	console_handler = logging.StreamHandler()
	console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
	console_handler.setLevel(logging.INFO)
	logger.addHandler(console_handler)

	formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
	if log_file:
		file_handler = RotatingFileHandler(log_file, maxBytes=5 * 1024 * 1024, backupCount=3)
		file_handler.setFormatter(formatter)
		logger.addHandler(file_handler)
	if error_file:
		error_handler = logging.FileHandler(error_file, "w", encoding="utf-8")
		error_handler.setLevel(logging.ERROR)
		error_handler.setFormatter(formatter)
		logger.addHandler(error_handler)


def logger_sink(logger):
	"""
	Returns a callable that can be passed as the logger of Document.parse():
	notes and repair actions go to the logger at INFO level, everything else
	(errors) at ERROR level.
	"""
	def sink(message):
		if message.startswith(("note:", "repair:")):
			logger.info(message)
		else:
			logger.error(message)
	return sink


def pprint(args):

	ret_str = ""
	for key, value in args.items():
		ret_str += f"{key:40} - {str(value):80}\n"

	return ret_str
