"""Docker image tag options from Nexus 3, ordered for humans."""
