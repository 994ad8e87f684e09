"""Centralized imports for the app layer.

The baseline_guard package imports its own dependencies directly so it can
be used without the service around it.
"""

# Standard library
import argparse
import glob
import json
import logging
import os
import sys
from datetime import datetime
from fnmatch import fnmatch
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

# External
from dotenv import load_dotenv
from fastapi import APIRouter, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, PlainTextResponse
from pydantic import BaseModel, ConfigDict, Field, ValidationError
