import streamlit as st
import matplotlib.pyplot as plt
import traceback

# ==============================
# STREAMLIT PAGE SETUP
# ==============================
st.set_page_config(
    page_title="PID Controller",
    layout="wide"
)

st.title("PID Controller")
st.write("Interactive tuning of the generic PID controller against a first-order plant")

# ==============================
# SAFE IMPORT OF PID CONTROLLER
# ==============================
try:
    from pid_config import ControllerConfig, SimulationConfig
    from pid_simulation import FirstOrderPlant, run_closed_loop
except Exception:
    st.error("❌ Failed to import PID controller from `pid_controller.py`")
    st.code(traceback.format_exc())
    st.stop()

# ==============================
# SIDEBAR CONTROLS
# ==============================
st.sidebar.header("PID Parameters")

kp = st.sidebar.slider("Kp (Proportional)", 0.0, 10.0, 1.0, 0.1)
ki = st.sidebar.slider("Ki (Integral)", 0.0, 5.0, 0.0, 0.05)
kd = st.sidebar.slider("Kd (Derivative)", 0.0, 5.0, 0.0, 0.05)

use_clamp = st.sidebar.checkbox("Clamp integral (anti-windup)", value=False)
integral_limit = st.sidebar.slider("Integral limit", 0.0, 50.0, 10.0, 0.5, disabled=not use_clamp)

st.sidebar.divider()

setpoint = st.sidebar.slider("Setpoint", 0.0, 10.0, 5.0, 0.1)
simulation_time = st.sidebar.slider("Simulation Time (s)", 2.0, 20.0, 10.0, 1.0)
time_constant = st.sidebar.slider("Plant time constant (s)", 0.1, 5.0, 1.0, 0.1)

st.sidebar.divider()

reset_pid = st.sidebar.button("🔄 Reset PID State")

# ==============================
# INITIALIZE / RESET PID
# ==============================
controller_cfg = ControllerConfig(kp, ki, kd, integral_limit if use_clamp else None)

# A clamp can only be removed by building a new controller
clamp_removed = (
    "pid" in st.session_state
    and not use_clamp
    and st.session_state.pid.integral_limit is not None
)

if "pid" not in st.session_state or reset_pid or clamp_removed:
    st.session_state.pid = controller_cfg.build()

pid = st.session_state.pid

# Update gains dynamically (do NOT reset state)
pid.gain_p = kp
pid.gain_i = ki
pid.gain_d = kd
if use_clamp:
    pid.set_integral_limit(integral_limit)

# ==============================
# RUN SIMULATION (WITH SAFETY)
# ==============================
try:
    sim_cfg = SimulationConfig(set_point=setpoint, duration=simulation_time, dt=0.01)
    result = run_closed_loop(pid, FirstOrderPlant(time_constant=time_constant), sim_cfg)
except Exception:
    st.error("❌ Error occurred during PID simulation")
    st.code(traceback.format_exc())
    st.stop()

# ==============================
# PLOTS
# ==============================
col1, col2 = st.columns(2)

with col1:
    st.subheader("System Output")

    fig1, ax1 = plt.subplots()
    ax1.plot(result.time, result.output, label="Output")
    ax1.axhline(setpoint, linestyle="--", color="tab:orange", label="Setpoint")
    ax1.set_xlabel("Time (s)")
    ax1.set_ylabel("Value")
    ax1.legend()
    ax1.grid(True)

    st.pyplot(fig1)

with col2:
    st.subheader("Control Signal")

    fig2, ax2 = plt.subplots()
    ax2.plot(result.time, result.control, label="Control Output (u)")
    ax2.set_xlabel("Time (s)")
    ax2.set_ylabel("Control Effort")
    ax2.grid(True)

    st.pyplot(fig2)

# ==============================
# ERROR PLOT
# ==============================
st.subheader("Tracking Error")

fig3, ax3 = plt.subplots()
ax3.plot(result.time, result.error, label="Error (Setpoint − Output)")
ax3.set_xlabel("Time (s)")
ax3.set_ylabel("Error")
ax3.grid(True)

st.pyplot(fig3)

# ==============================
# DEBUG / INTERNAL PID STATE
# ==============================
with st.expander("🛠 Debug / Internal PID State"):
    st.write("PID Gains")
    st.json({
        "Kp": pid.gain_p,
        "Ki": pid.gain_i,
        "Kd": pid.gain_d,
        "Integral limit": pid.integral_limit,
    })

    st.write(f"Integral Term: `{pid.previous_integral}`")
    st.write(f"Previous Error: `{pid.previous_error}`")
    st.write(f"Last Controller Output: `{pid.previous_output}`")

    if len(result.time):
        st.write(f"Final Output Value: `{result.output[-1]}`")
        st.write(f"Final Error: `{result.error[-1]}`")

# ==============================
# TUNING HELP
# ==============================
st.markdown("""
### PID Tuning Notes
- **Kp**: Increases responsiveness, too high → oscillations
- **Ki**: Eliminates steady-state error, too high → windup
- **Kd**: Dampens oscillations, sensitive to noise
- **Integral limit**: bounds the accumulated integral, 0 disables the integral term

The controller keeps its state between reruns, so gain changes apply from the next cycle.
Use the **error plot** to judge tuning quality.
""")
