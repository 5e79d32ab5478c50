"""GitHub API client for fetching pull request file listings."""

import os
import logging
from typing import Dict, List, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry


GITHUB_API_URL = 'https://api.github.com'


class GitHubAPIClient:
    """Handles GitHub API requests with retry logic and pagination."""

    def __init__(self, token: Optional[str] = None, base_url: str = GITHUB_API_URL):
        """Initialize the GitHub API client.

        Args:
            token: GitHub personal access token for authentication
            base_url: API root, overridable for GitHub Enterprise
        """
        # Use provided token or fall back to environment variable
        self.token = token or os.environ.get('GITHUB_TOKEN')
        self.base_url = base_url.rstrip('/')
        self.session = requests.Session()

        adapter = HTTPAdapter(
            max_retries=Retry(
                total=3,
                backoff_factor=0.3,
                status_forcelist=[500, 502, 503, 504]
            )
        )
        self.session.mount('https://', adapter)
        self.session.mount('http://', adapter)

        self.session.headers.update({'Accept': 'application/vnd.github.v3+json'})
        if self.token:
            self.session.headers.update({'Authorization': f'token {self.token}'})
            logging.info("Initialized GitHub API client with token")
        else:
            logging.warning("No GitHub token provided. Rate limits will be much lower.")

    def get_paginated(self, url: str, params: Dict = None) -> List[Dict]:
        """Fetch all pages of a paginated GitHub API endpoint.

        Args:
            url: The API endpoint URL
            params: Query parameters

        Returns:
            List of all items from all pages

        Raises:
            requests.HTTPError: If any page returns an error status
        """
        results = []
        page = 1
        per_page = 100

        params = dict(params or {})
        params['per_page'] = per_page

        while True:
            logging.debug(f"Fetching page {page} from {url}")
            response = self.session.get(url, params={**params, 'page': page})

            if response.status_code == 403:
                logging.error(f"GitHub API refused the request (rate limit?): {response.text}")

            response.raise_for_status()
            data = response.json()

            if not data:
                break

            results.extend(data)

            # Check if there are more pages
            if len(data) < per_page:
                break

            page += 1

        logging.debug(f"Fetched {len(results)} total items from {url}")
        return results

    def get_pull_request_files(self, repo: str, pr_number: int) -> List[Dict]:
        """Fetch the changed-file listing of a pull request.

        Args:
            repo: Repository name in format 'owner/repo'
            pr_number: Pull request number

        Returns:
            File entries as returned by the API, in diff order
        """
        url = f"{self.base_url}/repos/{repo}/pulls/{pr_number}/files"
        return self.get_paginated(url)
