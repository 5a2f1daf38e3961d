# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""FlyCors CORS engine — policy model, evaluator and policy registry.

Framework-agnostic: nothing in this package imports a web framework.
"""

from flycors.cors.options import DEFAULT_POLICY_NAME, CorsOptions
from flycors.cors.origin import OriginMatcher, PredicateOriginMatcher, WildcardSubdomainOriginMatcher
from flycors.cors.policy import CorsPolicy, PolicyHeaderValues
from flycors.cors.policy_builder import CorsPolicyBuilder
from flycors.cors.provider import CorsPolicyProvider, DefaultCorsPolicyProvider
from flycors.cors.result import CorsResult
from flycors.cors.service import CorsService

__all__ = [
    "DEFAULT_POLICY_NAME",
    "CorsOptions",
    "CorsPolicy",
    "CorsPolicyBuilder",
    "CorsPolicyProvider",
    "CorsResult",
    "CorsService",
    "DefaultCorsPolicyProvider",
    "OriginMatcher",
    "PolicyHeaderValues",
    "PredicateOriginMatcher",
    "WildcardSubdomainOriginMatcher",
]
